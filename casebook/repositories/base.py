"""Interface shared by the slot storage backends."""
from __future__ import annotations

import json
from typing import Iterable, Protocol

from casebook.domain.cases import DesignCase
from casebook.domain.errors import CorruptStateError, InvalidFormatError
from casebook.services.transfer import export_blob, parse_cases


class SlotStorage(Protocol):
    """Whole-collection read/write of one fixed storage key."""

    key: str

    def load(self) -> list[DesignCase]:
        ...

    def save(self, records: Iterable[DesignCase]) -> None:
        ...


def encode_slot(records: Iterable[DesignCase]) -> str:
    return export_blob(records)


def decode_slot(raw: str, *, origin: str) -> list[DesignCase]:
    """Decode a stored blob, reporting any failure as corrupt state."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptStateError(f"{origin}: stored value is not valid JSON ({exc.msg})") from exc
    except (ValueError, RecursionError) as exc:
        raise CorruptStateError(f"{origin}: stored value cannot be decoded ({exc})") from exc
    try:
        return parse_cases(data)
    except InvalidFormatError as exc:
        raise CorruptStateError(f"{origin}: {exc.message}") from exc
