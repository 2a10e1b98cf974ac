#!/usr/bin/env python3
"""
Export or import the whole case collection as a JSON file.

Usage:
  python scripts/transfer_cases.py export [--out design-cases-2024-01-01.json]
  python scripts/transfer_cases.py import design-cases-2024-01-01.json
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from casebook.core.config import get_settings
from casebook.core.logging import configure_logging
from casebook.domain.errors import InvalidFormatError
from casebook.services.case_store import build_storage, open_store
from casebook.services.transfer import export_blob, export_filename, import_blob


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Export/import design cases")
    sub = ap.add_subparsers(dest="command", required=True)
    exp = sub.add_parser("export", help="Write every case to a JSON file")
    exp.add_argument("--out", help="Output path (default: design-cases-<date>.json)")
    imp = sub.add_parser("import", help="Replace every case with a JSON file's content")
    imp.add_argument("path", help="File produced by export")
    args = ap.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    store = open_store(build_storage(settings))

    if args.command == "export":
        out = Path(args.out or export_filename())
        out.write_text(export_blob(store.list()), encoding="utf-8")
        print(f"OK: {len(store)} cases exported to {out}")
        return 0

    try:
        records = import_blob(Path(args.path).read_bytes())
    except InvalidFormatError as exc:
        sys.stderr.write(f"Import failed, collection unchanged: {exc.message}\n")
        return 2
    store.replace_all(records)
    print(f"OK: {len(records)} cases imported")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except OSError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
