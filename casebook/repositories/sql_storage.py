"""Slot storage backed by a key/value table through SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable
import logging

from casebook.db.models import Slot
from casebook.db.session import get_session
from casebook.domain.cases import DesignCase
from casebook.repositories.base import decode_slot, encode_slot

logger = logging.getLogger(__name__)


class SQLSlotStorage:
    """Reads and writes the whole collection as one row of the slots table."""

    def __init__(self, key: str) -> None:
        self.key = key

    def load(self) -> list[DesignCase]:
        with get_session() as session:
            slot = session.get(Slot, self.key)
            if slot is None:
                logger.debug("slot %s absent; starting empty", self.key)
                return []
            raw = slot.value
        records = decode_slot(raw, origin=f"slot {self.key}")
        logger.debug("loaded %d cases from slot %s", len(records), self.key)
        return records

    def save(self, records: Iterable[DesignCase]) -> None:
        payload = encode_slot(records)
        with get_session() as session:
            session.merge(Slot(key=self.key, value=payload, updated_at=datetime.now(timezone.utc)))
            session.commit()
        logger.debug("saved slot %s", self.key)
