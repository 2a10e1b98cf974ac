#!/usr/bin/env python3
"""
Register a new design case directly in the configured storage slot.

Usage:
  python scripts/add_case.py --title "Card UI" [--category UI设计] [--tags minimal,cards]
                             [--rating 4] [--image URL] [--source URL] [--point TEXT ...]
"""
from __future__ import annotations

import argparse
import sys

from casebook.core.config import get_settings
from casebook.core.logging import configure_logging
from casebook.domain.cases import DEFAULT_CATEGORY, SUGGESTED_CATEGORIES, CaseDraft
from casebook.services.case_store import build_storage, open_store


def split_tags(value: str | None) -> list[str]:
    return [t.strip() for t in (value or "").split(",") if t.strip()]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Add a design case")
    ap.add_argument("--title", required=True, help="Case title")
    ap.add_argument("--category", default=DEFAULT_CATEGORY, help=f"Category (suggested: {', '.join(SUGGESTED_CATEGORIES)})")
    ap.add_argument("--tags", help="Comma separated tags")
    ap.add_argument("--description", default="")
    ap.add_argument("--image", default="", help="Image URL")
    ap.add_argument("--source", default="", help="Source URL")
    ap.add_argument("--notes", default="")
    ap.add_argument("--rating", type=int, default=0, help="0-5")
    ap.add_argument("--point", action="append", default=[], help="Learning point (repeatable)")
    args = ap.parse_args(argv)

    title = (args.title or "").strip()
    if not title:
        raise SystemExit("Title must not be empty")
    if not 0 <= args.rating <= 5:
        raise SystemExit("Rating must be between 0 and 5")

    settings = get_settings()
    configure_logging(settings.log_level)
    store = open_store(build_storage(settings))
    record = store.create(
        CaseDraft(
            title=title,
            category=args.category,
            tags=split_tags(args.tags),
            description=args.description,
            image_url=args.image,
            source_url=args.source,
            notes=args.notes,
            rating=args.rating,
            learning_points=args.point,
        )
    )
    print("OK: case added")
    print(f"  ID: {record.id}")
    print(f"  Date: {record.date}")
    print(f"  Total cases: {len(store)}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
