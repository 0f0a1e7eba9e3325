#!/usr/bin/env python3
"""
Database maintenance for the API template.

Applies pending migrations, seeds the sample records or reports the
current schema version of the SQLite database configured through
``DATABASE_URL`` (or ``--db``).

Usage:
    python manage_db.py migrate
    python manage_db.py seed --db ./data/api_template.db
    python manage_db.py status
"""

import argparse
import logging
import os
import sqlite3
import sys

from api_template.app.core import db
from api_template.app.core.config import settings
from api_template.app.core.logging_config import setup_logging


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Manage the API template database (SQLite).")
    ap.add_argument("command", choices=["migrate", "seed", "status"], help="Action to perform")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL.")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level)
    if args.db:
        settings.database_url = os.path.abspath(args.db)

    try:
        if args.command == "migrate":
            applied = db.init_db()
            print(f"[+] Applied {applied} migration(s); schema version {db.current_version()}")
        elif args.command == "seed":
            db.init_db()
            inserted = db.seed_sample_data()
            print(f"[+] Inserted {inserted} sample record(s)")
        else:
            latest = db.MIGRATIONS[-1][0]
            version = db.current_version()
            print(f"[i] Database: {db.get_database_path()}")
            print(f"[i] Schema version {version} of {latest}" + (" (pending migrations)" if version < latest else ""))
    except sqlite3.Error as exc:
        logging.getLogger(__name__).error("Database command %s failed: %s", args.command, exc)
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
