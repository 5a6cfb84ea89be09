"""In-session series cache and the active (charted) selection.

The cache maps series id -> TimeSeries; caching an id again replaces the
previous instance wholesale. The active list holds the ids currently on the
chart in user-selection order and always references cached ids only.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from config import settings
from domain.time_series import TimeSeries

__all__ = ["SeriesCache"]

log = logging.getLogger(__name__)


class SeriesCache:
    def __init__(self, max_active: int = settings.MAX_ACTIVE_SERIES) -> None:
        self._max_active = max_active
        self._series: Dict[str, TimeSeries] = {}
        self._active: List[str] = []

    @property
    def max_active(self) -> int:
        return self._max_active

    def put(self, ts: TimeSeries) -> bool:
        """Cache ``ts``; returns True when it became the active series.

        A series cached while nothing is active is activated automatically.
        """
        self._series[ts.series_id] = ts
        if not self._active:
            self._active.append(ts.series_id)
            log.debug("Series %s cached and activated", ts.series_id)
            return True
        log.debug("Series %s cached", ts.series_id)
        return False

    def get(self, series_id: str) -> Optional[TimeSeries]:
        return self._series.get(series_id)

    def __contains__(self, series_id: object) -> bool:
        return series_id in self._series

    def __len__(self) -> int:
        return len(self._series)

    def ids(self) -> List[str]:
        """Cached ids in insertion order."""
        return list(self._series)

    def all_series(self) -> List[TimeSeries]:
        return list(self._series.values())

    def remove(self, series_id: str) -> bool:
        if self._series.pop(series_id, None) is None:
            return False
        if series_id in self._active:
            self._active.remove(series_id)
        return True

    def clear(self) -> None:
        self._series.clear()
        self._active.clear()

    # Active selection ------------------------------------------------
    @property
    def active_ids(self) -> List[str]:
        return list(self._active)

    def set_active(self, series_ids: Iterable[str]) -> None:
        ids: List[str] = []
        for sid in series_ids:
            if sid not in self._series:
                raise ValueError(f"Series {sid!r} is not cached")
            if sid not in ids:
                ids.append(sid)
        if len(ids) > self._max_active:
            raise ValueError(f"Maximum {self._max_active} series can be displayed at once.")
        self._active = ids

    def active_series(self) -> List[TimeSeries]:
        return [self._series[sid] for sid in self._active]
