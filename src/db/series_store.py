"""Persisted series store on SQLite.

``SqliteSeriesStore`` keeps one row per series id in ``series_document``
(see ``db.schema``). Saving an id that already exists replaces the row.

Availability model: the store is *unavailable* when its database could not
be opened. Queries on an unavailable store log and return an empty/False
result instead of raising, so the rest of the app keeps working without
persistence. ``SqliteSeriesStore.open`` is the strict variant that raises
``StoreUnavailableError`` instead.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import List, Optional

from core.filesystem import ensure_parent
from domain.models import Observation, SeriesRecord
from .schema import apply_schema

__all__ = ["StoreUnavailableError", "SqliteSeriesStore"]

log = logging.getLogger(__name__)

_COLUMNS = (
    "series_id, title, frequency, units, last_updated, first_date, last_date, "
    "created_at, observations"
)


class StoreUnavailableError(RuntimeError):
    pass


def _row_to_record(row: sqlite3.Row) -> SeriesRecord:
    try:
        raw = json.loads(row["observations"] or "[]")
    except ValueError:
        log.warning("Stored observations for %s are not valid JSON", row["series_id"])
        raw = []
    obs = tuple(
        Observation(str(o.get("date", "")), str(o.get("value", "")))
        for o in raw
        if isinstance(o, dict)
    )
    return SeriesRecord(
        series_id=row["series_id"],
        title=row["title"] or "",
        frequency=row["frequency"] or "",
        units=row["units"] or "",
        last_updated=row["last_updated"] or "",
        observations=obs,
        first_date=row["first_date"],
        last_date=row["last_date"],
        created_at=row["created_at"],
    )


class SqliteSeriesStore:
    def __init__(self, target: str | Path | sqlite3.Connection = ":memory:") -> None:
        self._conn: Optional[sqlite3.Connection] = None
        self._owns_conn = not isinstance(target, sqlite3.Connection)
        self._location = str(target) if self._owns_conn else "<connection>"
        self._error: Optional[str] = None
        try:
            if isinstance(target, sqlite3.Connection):
                conn = target
            else:
                if self._location != ":memory:":
                    ensure_parent(self._location)
                conn = sqlite3.connect(self._location)
            conn.row_factory = sqlite3.Row
            apply_schema(conn)
            self._conn = conn
            log.info("Series store ready at %s", self._location)
        except (sqlite3.Error, OSError) as e:
            self._error = str(e)
            log.error("Series store unavailable (%s): %s", self._location, e)

    @classmethod
    def open(cls, target: str | Path | sqlite3.Connection) -> "SqliteSeriesStore":
        store = cls(target)
        if not store.is_available():
            raise StoreUnavailableError(
                f"Could not open series store at {store._location}: {store._error}"
            )
        return store

    # Lifecycle -------------------------------------------------------
    @property
    def location(self) -> str:
        return self._location

    def is_available(self) -> bool:
        return self._conn is not None

    def status(self) -> str:
        if not self.is_available():
            return f"Store unavailable ({self._location}): {self._error or 'closed'}"
        return f"Store connected ({self._location}), {self.count()} series stored"

    def close(self) -> None:
        if self._conn is not None and self._owns_conn:
            self._conn.close()
        self._conn = None

    def __enter__(self) -> "SqliteSeriesStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Writes ----------------------------------------------------------
    def save(self, record: SeriesRecord) -> bool:
        if self._conn is None:
            return False
        created = record.created_at if record.created_at is not None else time.time()
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO series_document({_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        record.series_id,
                        record.title,
                        record.frequency,
                        record.units,
                        record.last_updated,
                        record.first_date,
                        record.last_date,
                        created,
                        json.dumps(record.observations_as_dicts()),
                    ),
                )
        except sqlite3.Error as e:
            log.error("Failed to save series %s: %s", record.series_id, e)
            return False
        log.info("Series saved: %s (%d observations)", record.series_id, record.observation_count)
        return True

    def delete(self, series_id: str) -> bool:
        if self._conn is None:
            return False
        try:
            with self._conn:
                cur = self._conn.execute(
                    "DELETE FROM series_document WHERE series_id = ?", (series_id,)
                )
        except sqlite3.Error as e:
            log.error("Failed to delete series %s: %s", series_id, e)
            return False
        log.info("Series deleted: %s", series_id)
        return cur.rowcount > 0

    def clear(self) -> bool:
        if self._conn is None:
            return False
        try:
            with self._conn:
                self._conn.execute("DELETE FROM series_document")
        except sqlite3.Error as e:
            log.error("Failed to clear series store: %s", e)
            return False
        log.info("All stored series cleared")
        return True

    # Reads -----------------------------------------------------------
    def get(self, series_id: str) -> Optional[SeriesRecord]:
        if self._conn is None:
            return None
        try:
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM series_document WHERE series_id = ?", (series_id,)
            ).fetchone()
        except sqlite3.Error as e:
            log.error("Failed to read series %s: %s", series_id, e)
            return None
        return _row_to_record(row) if row is not None else None

    def list_series_ids(self) -> List[str]:
        if self._conn is None:
            return []
        try:
            rows = self._conn.execute(
                "SELECT series_id FROM series_document ORDER BY series_id"
            ).fetchall()
        except sqlite3.Error as e:
            log.error("Failed to list series ids: %s", e)
            return []
        return [r[0] for r in rows]

    def exists(self, series_id: str) -> bool:
        if self._conn is None:
            return False
        try:
            row = self._conn.execute(
                "SELECT 1 FROM series_document WHERE series_id = ?", (series_id,)
            ).fetchone()
        except sqlite3.Error as e:
            log.error("Failed to check series %s: %s", series_id, e)
            return False
        return row is not None

    def count(self) -> int:
        if self._conn is None:
            return 0
        try:
            return int(self._conn.execute("SELECT COUNT(*) FROM series_document").fetchone()[0])
        except sqlite3.Error as e:
            log.error("Failed to count series: %s", e)
            return 0
