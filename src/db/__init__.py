"""Database package: schema helpers and the persisted series store.

``SqliteSeriesStore`` is the only store implementation.
"""

from .schema import apply_schema, get_existing_tables  # noqa: F401
from .series_store import SqliteSeriesStore, StoreUnavailableError  # noqa: F401

__all__ = [
    "apply_schema",
    "get_existing_tables",
    "SqliteSeriesStore",
    "StoreUnavailableError",
]
