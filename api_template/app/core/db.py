"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``), seeding the sample collection (``seed_sample_data``)
and probing connectivity for health checks (``check_connection``).  It
uses SQLite as a lightweight embedded database; to switch to another
DBMS you would replace connection logic and adapt SQL syntax
accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Tuple

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: sample entity collection
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS sample_entities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            is_active INTEGER NOT NULL DEFAULT 1,
            value TEXT,
            category TEXT NOT NULL DEFAULT 'Standard',
            tags TEXT NOT NULL DEFAULT '[]',
            metadata TEXT,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL,
            CONSTRAINT uq_sample_entities_name UNIQUE (name)
        );
        """,
    ),
    # Migration 2: index for time-based queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_sample_entities_created_at ON sample_entities(created_at);
        """,
    ),
]


SAMPLE_ENTITIES = [
    {
        "name": "Sample Item 1",
        "description": "This is a sample item for testing purposes",
        "is_active": True,
        "value": "100.50",
        "category": "Standard",
        "tags": ["sample", "test", "demo"],
        "metadata": {"category": "test-data", "priority": 1, "color": "blue"},
    },
    {
        "name": "Sample Item 2",
        "description": "Another sample item with different properties",
        "is_active": True,
        "value": "250.75",
        "category": "Premium",
        "tags": ["premium", "featured"],
        "metadata": {"category": "premium-data", "priority": 2, "color": "gold"},
    },
    {
        "name": "Sample Item 3",
        "description": "Enterprise level sample item",
        "is_active": False,
        "value": "1000.00",
        "category": "Enterprise",
        "tags": ["enterprise", "advanced"],
        "metadata": {"category": "enterprise-data", "priority": 3, "color": "platinum"},
    },
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # api_template/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    waits at most ``settings.database_timeout`` seconds on a locked
    database.  No type detection is enabled; timestamps are stored and
    returned as ISO-8601 strings.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.database_timeout)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def current_version() -> int:
    """Return the highest applied migration version (0 for a fresh database).

    Read-only: a database without a ``migrations`` table reports 0 and is
    left untouched.
    """
    with get_cursor() as cursor:
        table = cursor.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'migrations'"
        ).fetchone()
        if table is None:
            return 0
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        return row["version"] if row and row["version"] is not None else 0


def init_db() -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.  Returns the number of migrations
    applied.
    """
    applied = 0
    with get_cursor() as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        version_now = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > version_now:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                version_now = version
                applied += 1

    if applied:
        logger.info("Database migrations applied successfully (now at version %s)", version_now)
    else:
        logger.info("Database is up to date. No migrations needed.")
    return applied


def seed_sample_data() -> int:
    """Insert the sample records if the collection is empty.

    Returns the number of records inserted (0 when data already exists).
    """
    with get_cursor() as cursor:
        row = cursor.execute("SELECT COUNT(*) AS total FROM sample_entities").fetchone()
        if row["total"]:
            logger.info("Database already contains sample data. Skipping seeding.")
            return 0

        now = utc_now()
        for entity in SAMPLE_ENTITIES:
            cursor.execute(
                """
                INSERT INTO sample_entities
                    (name, description, is_active, value, category, tags, metadata, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entity["name"],
                    entity["description"],
                    int(entity["is_active"]),
                    entity["value"],
                    entity["category"],
                    json.dumps(entity["tags"]),
                    json.dumps(entity["metadata"]),
                    now,
                    now,
                ),
            )
    logger.info("Successfully seeded %s sample entities into the database.", len(SAMPLE_ENTITIES))
    return len(SAMPLE_ENTITIES)


def check_connection() -> None:
    """Run a trivial query; raises ``sqlite3.Error`` when the database is unusable."""
    conn = get_connection()
    try:
        conn.execute("SELECT 1").fetchone()
    finally:
        conn.close()
