"""
Case collection use cases: create/update/delete, filtered views, bulk replace.

CaseStore is the only mutator of the in-memory collection. Every mutation
hands the complete new collection to the slot storage before it becomes the
current state, so a failed save leaves memory exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional
import logging
import uuid

from casebook.core.config import Settings
from casebook.domain.cases import ALL, CaseDraft, DesignCase, utc_today
from casebook.domain.errors import CorruptStateError, NotFoundError
from casebook.repositories.base import SlotStorage

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class CaseStats:
    """Dashboard counters: cases, distinct categories, distinct tags."""

    total: int
    categories: int
    tags: int


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


class CaseStore:
    """Owns the ordered case collection (newest first) and persists it."""

    def __init__(
        self,
        storage: SlotStorage,
        records: Iterable[DesignCase] = (),
        *,
        id_factory: Callable[[], str] = _new_id,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.storage = storage
        self._cases: list[DesignCase] = list(records)
        self._id_factory = id_factory
        self._today = today

    # -------------------------- reads --------------------------
    def list(self) -> list[DesignCase]:
        return list(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def get(self, case_id: str) -> DesignCase:
        index = self._index_of(case_id)
        if index is None:
            raise NotFoundError(case_id)
        return self._cases[index]

    def filter(self, category: Optional[str] = None, tag: Optional[str] = None) -> list[DesignCase]:
        """Cases matching both constraints; ``None`` or ``"all"`` disables one."""
        want_category = category not in (None, ALL)
        want_tag = tag not in (None, ALL)
        return [
            c
            for c in self._cases
            if (not want_category or c.category == category) and (not want_tag or tag in c.tags)
        ]

    def distinct_categories(self) -> list[str]:
        return _unique(c.category for c in self._cases)

    def distinct_tags(self) -> list[str]:
        return _unique(tag for c in self._cases for tag in c.tags)

    def stats(self) -> CaseStats:
        return CaseStats(
            total=len(self._cases),
            categories=len(self.distinct_categories()),
            tags=len(self.distinct_tags()),
        )

    # -------------------------- mutations --------------------------
    def create(self, draft: CaseDraft) -> DesignCase:
        record = DesignCase.from_draft(self._unused_id(), self._today().isoformat(), draft)
        self._commit([record, *self._cases])
        logger.info("created case %s (%s)", record.id, record.title)
        return record

    def update(self, case_id: str, draft: CaseDraft) -> DesignCase:
        index = self._index_of(case_id)
        if index is None:
            raise NotFoundError(case_id)
        updated = self._cases[index].with_draft(draft)
        cases = list(self._cases)
        cases[index] = updated
        self._commit(cases)
        logger.info("updated case %s (%s)", updated.id, updated.title)
        return updated

    def delete(self, case_id: str) -> None:
        """Remove a case; an unknown id is not an error."""
        index = self._index_of(case_id)
        cases = list(self._cases)
        if index is None:
            logger.debug("delete of unknown case %s ignored", case_id)
        else:
            del cases[index]
        self._commit(cases)
        if index is not None:
            logger.info("deleted case %s", case_id)

    def replace_all(self, records: Iterable[DesignCase]) -> None:
        cases = list(records)
        self._commit(cases)
        logger.info("replaced collection with %d cases", len(cases))

    # -------------------------- helpers --------------------------
    def _index_of(self, case_id: str) -> Optional[int]:
        for index, case in enumerate(self._cases):
            if case.id == case_id:
                return index
        return None

    def _unused_id(self) -> str:
        taken = {c.id for c in self._cases}
        candidate = self._id_factory()
        while candidate in taken:
            candidate = self._id_factory()
        return candidate

    def _commit(self, cases: list[DesignCase]) -> None:
        self.storage.save(cases)
        self._cases = cases


def open_store(storage: SlotStorage, **kwargs) -> CaseStore:
    """
    Load the slot and build a store around it.

    A corrupt slot is reported and the store starts empty; the stored value
    is only overwritten by the next successful mutation.
    """
    try:
        records = storage.load()
    except CorruptStateError as exc:
        logger.warning("ignoring unreadable case storage: %s", exc.message)
        records = []
    return CaseStore(storage, records, **kwargs)


def build_storage(settings: Settings) -> SlotStorage:
    """SQL slot when DATABASE_URL is configured, JSON file otherwise."""
    if settings.database_url:
        from casebook.db.create_tables import create_all
        from casebook.repositories.sql_storage import SQLSlotStorage

        create_all()
        return SQLSlotStorage(settings.storage_key)
    from casebook.repositories.json_storage import JsonSlotStorage

    return JsonSlotStorage(settings.data_dir, settings.storage_key)
