#!/usr/bin/env python3
"""
Add a welfare scheme straight into the snapshot file.

Run it while the API is stopped; the running service keeps its own copy in
memory and would overwrite the change on its next write.

Usage:
  python scripts/add_scheme.py --title "Housing Aid" --description "Rent support" [--department Housing] [--db data.sqlite]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the citizen_api package importable when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from citizen_api.core.config import get_settings  # noqa: E402
from citizen_api.db.bootstrap import SynchronousBootstrap  # noqa: E402
from citizen_api.services.scheme_service import SchemeService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a scheme to the snapshot file")
    ap.add_argument("--title", required=True, help="Scheme title")
    ap.add_argument("--description", required=True, help="Short description")
    ap.add_argument("--department", help="Owning department (optional)")
    ap.add_argument("--db", help="Snapshot file (default: DB_FILE or data.sqlite)")
    args = ap.parse_args()

    bootstrap = SynchronousBootstrap(args.db or get_settings().db_file)
    store = bootstrap.ensure_database()
    try:
        scheme = SchemeService(store).create_scheme(args.title, args.description, args.department)
    finally:
        bootstrap.shutdown()
    print("OK: scheme added")
    print(f"  ID: {scheme['id']}")
    print(f"  Title: {scheme['title']}")
    if scheme["department"]:
        print(f"  Department: {scheme['department']}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
