"""
Design case records and drafts.

A case is stored and exported with the camelCase keys of the browser
catalog it originates from (``imageUrl``, ``sourceUrl``, ``learningPoints``)
so exported files stay interchangeable.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date, datetime, timezone
from typing import Any, Iterable

SUGGESTED_CATEGORIES = (
    "UI设计",
    "UX设计",
    "品牌设计",
    "插画",
    "排版",
    "图标",
    "动效",
    "3D设计",
    "网页设计",
    "移动端设计",
)
DEFAULT_CATEGORY = SUGGESTED_CATEGORIES[0]

# Filter sentinel meaning "no constraint".
ALL = "all"


def utc_today() -> date:
    """Creation dates are stamped in UTC, like the browser catalog did."""
    return datetime.now(timezone.utc).date()

# attribute name -> (wire key, expected type)
FIELD_SPECS: dict[str, tuple[str, type]] = {
    "id": ("id", str),
    "title": ("title", str),
    "category": ("category", str),
    "tags": ("tags", list),
    "description": ("description", str),
    "image_url": ("imageUrl", str),
    "source_url": ("sourceUrl", str),
    "date": ("date", str),
    "notes": ("notes", str),
    "rating": ("rating", int),
    "learning_points": ("learningPoints", list),
}
SEQUENCE_FIELDS = ("tags", "learning_points")


def _as_tuple(values: Iterable[str] | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class CaseDraft:
    """Caller-supplied values of a case, without the store-assigned id/date."""

    title: str = ""
    category: str = DEFAULT_CATEGORY
    tags: tuple[str, ...] = ()
    description: str = ""
    image_url: str = ""
    source_url: str = ""
    notes: str = ""
    rating: int = 0
    learning_points: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in SEQUENCE_FIELDS:
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))


@dataclass(frozen=True)
class DesignCase:
    id: str
    title: str
    category: str
    tags: tuple[str, ...]
    description: str
    image_url: str
    source_url: str
    date: str
    notes: str
    rating: int
    learning_points: tuple[str, ...]

    def __post_init__(self) -> None:
        for name in SEQUENCE_FIELDS:
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))

    @classmethod
    def from_draft(cls, case_id: str, date: str, draft: CaseDraft) -> "DesignCase":
        values = {f.name: getattr(draft, f.name) for f in fields(CaseDraft)}
        return cls(id=case_id, date=date, **values)

    def with_draft(self, draft: CaseDraft) -> "DesignCase":
        """Return a copy with every field but id/date taken from ``draft``."""
        values = {f.name: getattr(draft, f.name) for f in fields(CaseDraft)}
        return replace(self, **values)

    def to_draft(self) -> CaseDraft:
        return CaseDraft(**{f.name: getattr(self, f.name) for f in fields(CaseDraft)})


def case_to_dict(case: DesignCase) -> dict[str, Any]:
    """Render a case with its wire keys, in the declared field order."""
    out: dict[str, Any] = {}
    for attr, (key, _kind) in FIELD_SPECS.items():
        value = getattr(case, attr)
        out[key] = list(value) if attr in SEQUENCE_FIELDS else value
    return out
