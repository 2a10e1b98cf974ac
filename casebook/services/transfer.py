"""
Export/import of the whole case collection as a JSON file.

The same format is used for the persisted slot, so a downloaded export can be
dropped in place of the storage file and vice versa.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Iterable

from casebook.domain.cases import FIELD_SPECS, SEQUENCE_FIELDS, DesignCase, case_to_dict, utc_today
from casebook.domain.errors import InvalidFormatError

EXPORT_PREFIX = "design-cases"


def export_blob(records: Iterable[DesignCase]) -> str:
    """Serialize the collection as human-readable JSON."""
    return json.dumps([case_to_dict(r) for r in records], ensure_ascii=False, indent=2)


def export_filename(day: date | None = None) -> str:
    day = day or utc_today()
    return f"{EXPORT_PREFIX}-{day.isoformat()}.json"


def _type_ok(value: Any, kind: type) -> bool:
    # bool is a subclass of int; a rating of True is not a rating
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, kind)


def _parse_entry(index: int, entry: Any) -> DesignCase:
    if not isinstance(entry, dict):
        raise InvalidFormatError(f"entry {index}: expected an object, got {type(entry).__name__}")
    values: dict[str, Any] = {}
    for attr, (key, kind) in FIELD_SPECS.items():
        if key not in entry:
            raise InvalidFormatError(f"entry {index}: missing field {key!r}")
        value = entry[key]
        if not _type_ok(value, kind):
            raise InvalidFormatError(
                f"entry {index}: field {key!r} must be {kind.__name__}, got {type(value).__name__}"
            )
        if attr in SEQUENCE_FIELDS and not all(isinstance(item, str) for item in value):
            raise InvalidFormatError(f"entry {index}: field {key!r} must contain only strings")
        values[attr] = value
    return DesignCase(**values)


def parse_cases(data: Any) -> list[DesignCase]:
    """Validate already-decoded JSON data and build the case list."""
    if not isinstance(data, list):
        raise InvalidFormatError(f"expected a list of cases, got {type(data).__name__}")
    records = [_parse_entry(i, entry) for i, entry in enumerate(data)]
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise InvalidFormatError(f"duplicate case id {record.id!r}")
        seen.add(record.id)
    return records


def import_blob(payload: str | bytes) -> list[DesignCase]:
    """
    Parse an exported payload back into cases.

    All-or-nothing: any malformed entry rejects the whole payload.
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = bytes(payload).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InvalidFormatError(f"payload is not UTF-8 text: {exc}") from exc
    else:
        payload = payload.lstrip("\ufeff")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise InvalidFormatError(f"payload is not valid JSON: {exc.msg}") from exc
    except (ValueError, RecursionError) as exc:
        # oversized integer literals, nesting deeper than the parser allows
        raise InvalidFormatError(f"payload is not acceptable JSON: {exc}") from exc
    return parse_cases(data)
