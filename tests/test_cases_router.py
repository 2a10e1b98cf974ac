from __future__ import annotations

import inspect
import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the casebook package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from casebook.app import create_app  # noqa: E402
from casebook.core import config as core_config  # noqa: E402


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("CASEBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    core_config.get_settings.cache_clear()
    app = create_app()
    with TestClient(app) as c:
        yield c
    core_config.get_settings.cache_clear()


def _draft(**overrides):
    body = {"title": "Card UI", "category": "UI设计", "tags": ["minimal"], "rating": 4,
            "imageUrl": "https://example.com/a.png", "learningPoints": ["spacing"]}
    body.update(overrides)
    return body


def test_crud_flow(client, tmp_path):
    resp = client.post("/cases", json=_draft())
    assert resp.status_code == 201
    first = resp.json()
    assert first["imageUrl"] == "https://example.com/a.png"
    assert first["date"]

    second = client.post("/cases", json=_draft(title="Poster", category="排版", tags=[" bold ", ""])).json()
    assert second["tags"] == ["bold"]
    assert [c["id"] for c in client.get("/cases").json()] == [second["id"], first["id"]]

    resp = client.put(f"/cases/{first['id']}", json=_draft(title="Card UI v2", rating=5))
    assert resp.status_code == 200
    assert resp.json()["date"] == first["date"]
    assert client.get(f"/cases/{first['id']}").json()["title"] == "Card UI v2"

    assert client.delete(f"/cases/{second['id']}").status_code == 204
    assert client.delete(f"/cases/{second['id']}").status_code == 204
    assert [c["id"] for c in client.get("/cases").json()] == [first["id"]]

    stored = json.loads((tmp_path / "designCases.json").read_text(encoding="utf-8"))
    assert [c["id"] for c in stored] == [first["id"]]


def test_missing_case_is_404(client):
    assert client.get("/cases/nope").status_code == 404
    assert client.put("/cases/nope", json=_draft()).status_code == 404


def test_draft_validation(client):
    assert client.post("/cases", json=_draft(title="")).status_code == 422
    assert client.post("/cases", json=_draft(title="   ")).status_code == 422
    assert client.post("/cases", json=_draft(rating=6)).status_code == 422
    assert client.post("/cases", json=_draft(title="  Card UI  ")).json()["title"] == "Card UI"


def test_filters_and_facets(client):
    client.post("/cases", json=_draft(title="a", category="UI设计", tags=["minimal"]))
    client.post("/cases", json=_draft(title="b", category="插画", tags=["color"]))

    titles = [c["title"] for c in client.get("/cases", params={"category": "UI设计"}).json()]
    assert titles == ["a"]
    titles = [c["title"] for c in client.get("/cases", params={"category": "all", "tag": "color"}).json()]
    assert titles == ["b"]

    facets = client.get("/cases/facets").json()
    assert facets["categories"] == ["插画", "UI设计"]
    assert facets["tags"] == ["color", "minimal"]
    assert "动效" in facets["suggested_categories"]
    assert facets["stats"] == {"total": 2, "categories": 2, "tags": 2}


def test_export_then_import(client):
    client.post("/cases", json=_draft())
    resp = client.get("/cases/export")
    assert resp.status_code == 200
    assert 'filename="design-cases-' in resp.headers["content-disposition"]
    blob = resp.content

    client.post("/cases", json=_draft(title="later"))
    resp = client.post("/cases/import", files={"file": ("backup.json", blob, "application/json")})
    assert resp.status_code == 200
    assert resp.json() == {"imported": 1}
    assert [c["title"] for c in client.get("/cases").json()] == ["Card UI"]


def test_bad_import_keeps_collection(client):
    client.post("/cases", json=_draft())
    resp = client.post("/cases/import", files={"file": ("bad.json", b"{not valid}", "application/json")})
    assert resp.status_code == 400
    assert len(client.get("/cases").json()) == 1


def test_oversized_json_import_is_rejected(client):
    client.post("/cases", json=_draft())
    blob = ("[" * 100000 + "]" * 100000).encode("utf-8")
    resp = client.post("/cases/import", files={"file": ("deep.json", blob, "application/json")})
    assert resp.status_code == 400
    assert len(client.get("/cases").json()) == 1


def test_import_handler_runs_in_the_threadpool():
    from casebook.routers import cases as cases_router

    assert not inspect.iscoroutinefunction(cases_router.import_cases)
