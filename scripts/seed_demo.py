#!/usr/bin/env python3
"""
Load the demo applicants into the snapshot file (same data as
POST /api/dev/seed-applications). Run it while the API is stopped.

Usage:
  python scripts/seed_demo.py [--db data.sqlite]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from citizen_api.core.config import get_settings  # noqa: E402
from citizen_api.db.bootstrap import SynchronousBootstrap  # noqa: E402
from citizen_api.services.dev_service import DevService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed demo applications")
    ap.add_argument("--db", help="Snapshot file (default: DB_FILE or data.sqlite)")
    args = ap.parse_args()

    bootstrap = SynchronousBootstrap(args.db or get_settings().db_file)
    store = bootstrap.ensure_database()
    try:
        result = DevService(store).seed_applications()
    finally:
        bootstrap.shutdown()
    print(f"OK: {result['inserted']} applications inserted")
    for tracking_id in result["trackingIds"]:
        print(f"  {tracking_id}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
