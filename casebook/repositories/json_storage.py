"""
JSON file persistence adapter.

Each slot key maps to one file ``<data_dir>/<key>.json`` holding the whole
collection. Writes go to a temporary file in the same directory which then
replaces the slot file, so a crash mid-write leaves the previous value intact.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
import logging
import os
import tempfile

from casebook.domain.cases import DesignCase
from casebook.domain.errors import CorruptStateError
from casebook.repositories.base import decode_slot, encode_slot

logger = logging.getLogger(__name__)


class JsonSlotStorage:
    """Slot storage backed by one JSON file."""

    def __init__(self, data_dir: Path | str, key: str) -> None:
        self.data_dir = Path(data_dir)
        self.key = key

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}.json"

    def load(self) -> list[DesignCase]:
        if not self.path.exists():
            logger.debug("slot %s absent at %s; starting empty", self.key, self.path)
            return []
        try:
            raw = self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptStateError(f"{self.path}: cannot read slot ({exc})") from exc
        records = decode_slot(raw, origin=str(self.path))
        logger.debug("loaded %d cases from %s", len(records), self.path)
        return records

    def save(self, records: Iterable[DesignCase]) -> None:
        payload = encode_slot(records)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.key}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("saved slot %s to %s", self.key, self.path)
