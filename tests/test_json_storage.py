from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the casebook package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from casebook.domain.cases import CaseDraft  # noqa: E402
from casebook.domain.errors import CorruptStateError  # noqa: E402
from casebook.repositories import json_storage  # noqa: E402
from casebook.repositories.json_storage import JsonSlotStorage  # noqa: E402
from casebook.services.case_store import CaseStore, open_store  # noqa: E402


@pytest.fixture()
def storage(tmp_path):
    return JsonSlotStorage(tmp_path / "data", "designCases")


def test_load_without_any_save_is_empty(storage):
    assert storage.load() == []
    assert not storage.path.exists()


def test_store_mutations_reach_the_slot_file(storage):
    store = CaseStore(storage)
    first = store.create(CaseDraft(title="Card UI", tags=["minimal"], rating=4))
    second = store.create(CaseDraft(title="Poster", category="排版"))
    store.delete(first.id)

    assert storage.path.name == "designCases.json"
    assert storage.load() == [second]
    assert open_store(storage).list() == [second]


def test_corrupt_file_is_reported(storage):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text("{oops", encoding="utf-8")
    with pytest.raises(CorruptStateError):
        storage.load()


def test_wrong_shape_is_reported_as_corrupt(storage):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text('{"designCases": []}', encoding="utf-8")
    with pytest.raises(CorruptStateError):
        storage.load()


def test_failed_write_keeps_previous_value(storage, monkeypatch):
    store = CaseStore(storage)
    kept = store.create(CaseDraft(title="Kept"))

    def boom(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(json_storage.os, "replace", boom)
    with pytest.raises(OSError):
        store.create(CaseDraft(title="Lost"))

    monkeypatch.undo()
    assert storage.load() == [kept]
    assert store.list() == [kept]
    assert [p.name for p in storage.data_dir.iterdir()] == ["designCases.json"]


@pytest.mark.parametrize(
    "blob",
    [
        "[" * 100000 + "]" * 100000,
        pytest.param(
            '[{"id": "1", "rating": ' + "9" * 5000 + "}]",
            marks=pytest.mark.skipif(
                not hasattr(sys, "get_int_max_str_digits"), reason="no integer digit limit before 3.11"
            ),
        ),
    ],
    ids=["deep-nesting", "huge-integer"],
)
def test_undecodable_slot_opens_as_empty_store(storage, blob):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text(blob, encoding="utf-8")
    with pytest.raises(CorruptStateError):
        storage.load()
    assert open_store(storage).list() == []
