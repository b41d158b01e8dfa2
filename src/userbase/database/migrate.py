"""Minimal SQLite migration helpers for additive schema changes."""

import sqlite3

from ..utils.logging import get_logger
from ..utils.text import normalize

logger = get_logger(__name__)


def _column_exists(conn: sqlite3.Connection, table: str, column: str) -> bool:
    """Check if a column exists in a table."""
    cur = conn.execute(f"PRAGMA table_info({table});")
    cols = [row[1] for row in cur.fetchall()]
    return column in cols


def _table_exists(conn: sqlite3.Connection, table: str) -> bool:
    """Check if a table exists."""
    cur = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?;",
        (table,)
    )
    return cur.fetchone() is not None


def ensure_users_name_normalized(sqlite_path: str) -> int:
    """
    Add and backfill users.name_normalized on databases created before it existed.

    Rows whose name_normalized is NULL are filled from normalize(name). A
    missing users table is left alone (create_all builds it with the column).

    Args:
        sqlite_path: Path to SQLite database file

    Returns:
        Number of rows backfilled
    """
    conn = sqlite3.connect(sqlite_path)
    try:
        if not _table_exists(conn, "users"):
            return 0
        if not _column_exists(conn, "users", "name_normalized"):
            conn.execute("ALTER TABLE users ADD COLUMN name_normalized TEXT;")
        rows = conn.execute(
            "SELECT seq, name FROM users WHERE name_normalized IS NULL;"
        ).fetchall()
        conn.executemany(
            "UPDATE users SET name_normalized = ? WHERE seq = ?;",
            [(normalize(name), seq) for seq, name in rows],
        )
        conn.commit()
        if rows:
            logger.info(f"Backfilled name_normalized for {len(rows)} users")
        return len(rows)
    finally:
        conn.close()
