"""
Create the toolbox tables (wrapper).

Usage (from repo root):
  python scripts/db/init_db.py
  python scripts/db/init_db.py --database-url sqlite:///toolbox.db

This avoids fiddling with PYTHONPATH on Windows.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def main() -> int:
    repo_root = Path(__file__).resolve().parents[2]
    sys.path.insert(0, str(repo_root / "backend"))

    parser = argparse.ArgumentParser()
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL for this run")
    args = parser.parse_args()
    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url

    from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

    from toolbox.db.init_db import init_db  # noqa: E402

    try:
        init_db()
    except SQLAlchemyError as e:
        print(f"[DB] Failed to create tables: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
