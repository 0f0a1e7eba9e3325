"""
Persistence for the sample entity collection (raw SQL on SQLite).

Every function opens its own connection, runs parameterized statements
and closes the connection before returning.  Functions are synchronous;
the service layer runs them on a worker thread.

Driver errors are translated at this boundary:

- a violation of the ``UNIQUE (name)`` constraint becomes
  :class:`ConflictError`, which makes the constraint the final
  authority on name uniqueness even when two writers race past the
  service-level pre-check;
- any other ``sqlite3.Error`` becomes :class:`ServiceUnavailableError`.
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from api_template.app.core.db import get_connection
from api_template.app.core.errors import ConflictError, ServiceUnavailableError

_COLUMNS = "id, name, description, is_active, value, category, tags, metadata, created_at, updated_at"


@contextmanager
def _connection(name: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    try:
        conn = get_connection()
    except sqlite3.Error as exc:
        raise ServiceUnavailableError(f"Database is unavailable: {exc}") from exc
    try:
        yield conn
        conn.commit()
    except sqlite3.IntegrityError as exc:
        conn.rollback()
        if "sample_entities.name" in str(exc):
            raise ConflictError(name or "") from exc
        raise ServiceUnavailableError(f"Database error: {exc}") from exc
    except sqlite3.Error as exc:
        raise ServiceUnavailableError(f"Database error: {exc}") from exc
    finally:
        conn.close()


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    record = dict(row)
    record["is_active"] = bool(record["is_active"])
    record["tags"] = json.loads(record["tags"]) if record["tags"] else []
    record["metadata"] = json.loads(record["metadata"]) if record["metadata"] else None
    return record


def _build_filters(
    search: Optional[str],
    is_active: Optional[bool],
    category: Optional[str],
) -> Tuple[str, List[Any]]:
    clauses: List[str] = []
    params: List[Any] = []
    if search is not None and search.strip():
        pattern = f"%{_escape_like(search)}%"
        clauses.append("(name LIKE ? ESCAPE '\\' OR (description IS NOT NULL AND description LIKE ? ESCAPE '\\'))")
        params.extend([pattern, pattern])
    if is_active is not None:
        clauses.append("is_active = ?")
        params.append(int(is_active))
    if category is not None:
        clauses.append("category = ?")
        params.append(category)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def list_page(
    *,
    skip: int,
    take: int,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    category: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """Return one id-ordered window of matching rows and the total match count."""
    where, params = _build_filters(search, is_active, category)
    with _connection() as conn:
        # One read transaction so the count and the page share a snapshot.
        conn.execute("BEGIN")
        total = conn.execute(f"SELECT COUNT(*) FROM sample_entities {where}", params).fetchone()[0]
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM sample_entities {where} ORDER BY id ASC LIMIT ? OFFSET ?",
            [*params, take, skip],
        ).fetchall()
    return [_row_to_dict(row) for row in rows], total


def get_by_id(entity_id: int) -> Optional[Dict[str, Any]]:
    with _connection() as conn:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM sample_entities WHERE id = ?",
            (entity_id,),
        ).fetchone()
    return _row_to_dict(row) if row else None


def name_exists(name: str, exclude_id: Optional[int] = None) -> bool:
    """Whether another record already uses ``name`` (optionally ignoring ``exclude_id``)."""
    sql = "SELECT 1 FROM sample_entities WHERE name = ?"
    params: List[Any] = [name]
    if exclude_id is not None:
        sql += " AND id <> ?"
        params.append(exclude_id)
    with _connection() as conn:
        row = conn.execute(sql + " LIMIT 1", params).fetchone()
    return row is not None


def insert(record: Dict[str, Any]) -> int:
    """Insert a full record and return the generated id."""
    with _connection(record["name"]) as conn:
        cursor = conn.execute(
            """
            INSERT INTO sample_entities
                (name, description, is_active, value, category, tags, metadata, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record["name"],
                record["description"],
                int(record["is_active"]),
                record["value"],
                record["category"],
                json.dumps(record["tags"]),
                json.dumps(record["metadata"]) if record["metadata"] is not None else None,
                record["created_at"],
                record["updated_at"],
            ),
        )
        return int(cursor.lastrowid)


def replace(entity_id: int, record: Dict[str, Any]) -> bool:
    """Overwrite every mutable column of a row; ``created_at`` is never touched."""
    with _connection(record["name"]) as conn:
        cursor = conn.execute(
            """
            UPDATE sample_entities
            SET name = ?, description = ?, is_active = ?, value = ?, category = ?,
                tags = ?, metadata = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                record["name"],
                record["description"],
                int(record["is_active"]),
                record["value"],
                record["category"],
                json.dumps(record["tags"]),
                json.dumps(record["metadata"]) if record["metadata"] is not None else None,
                record["updated_at"],
                entity_id,
            ),
        )
        return cursor.rowcount > 0


def delete(entity_id: int) -> bool:
    with _connection() as conn:
        cursor = conn.execute("DELETE FROM sample_entities WHERE id = ?", (entity_id,))
        return cursor.rowcount > 0


def exists(entity_id: int) -> bool:
    with _connection() as conn:
        row = conn.execute("SELECT 1 FROM sample_entities WHERE id = ? LIMIT 1", (entity_id,)).fetchone()
    return row is not None
