"""SQLite schema for the persisted series store.

One document-style table keyed by series id. Observations are stored as a
JSON list of ``{"date": ..., "value": ...}`` objects so a stored series is
read back in a single row fetch, mirroring the document shape used by
imports.

Timestamps are stored as UNIX seconds (REAL).
"""

from __future__ import annotations
import sqlite3

SCHEMA_VERSION = 1

DDL: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS schema_meta (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS series_document (
        series_id TEXT PRIMARY KEY,
        title TEXT NOT NULL DEFAULT '',
        frequency TEXT NOT NULL DEFAULT '',
        units TEXT NOT NULL DEFAULT '',
        last_updated TEXT NOT NULL DEFAULT '',
        first_date TEXT,
        last_date TEXT,
        created_at REAL,
        observations TEXT NOT NULL DEFAULT '[]' -- JSON list of {date, value}
    );
    """.strip(),
]


def apply_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()
    for stmt in DDL:
        cur.execute(stmt)
    cur.execute(
        "INSERT OR REPLACE INTO schema_meta(key, value) VALUES ('schema_version', ?)",
        (str(SCHEMA_VERSION),),
    )
    conn.commit()


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    cur = conn.cursor()
    cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return sorted(r[0] for r in cur.fetchall())
