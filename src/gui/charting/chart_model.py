"""Chart model: active series, numeric points, shared value range.

``ChartModel.set_series`` takes the active series in user-selection order and,
in one pass per series, keeps only observations whose value parses as a
finite float. Each kept point remembers the ordinal of its observation so a
hover hit can be traced back to the original (date, value) strings.

States:
 - EMPTY: no series set.
 - NO_NUMERIC_DATA: series present but none of them has a numeric point.
 - READY: at least one numeric point; ``min_value <= max_value``.

Series order drives color and legend assignment. ``revision`` increments on
every update so a projection cache can detect that it is stale.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from config import settings
from domain.models import Observation
from domain.time_series import TimeSeries
from .palette import color_for_series
from .types import ChartPoint, ValueRange

__all__ = ["ModelState", "SeriesPoints", "ChartModel", "parse_value", "legend_label"]

log = logging.getLogger(__name__)

# relative half-width for flat ranges at large magnitudes
_RELATIVE_WIDEN = 1e-9


class ModelState(str, Enum):
    EMPTY = "empty"
    NO_NUMERIC_DATA = "no_numeric_data"
    READY = "ready"


def parse_value(text: str) -> Optional[float]:
    """Finite float for ``text`` or None (missing-data markers, NaN, inf)."""
    try:
        v = float(text)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def legend_label(series_id: str, max_len: int = settings.LEGEND_LABEL_MAX) -> str:
    if len(series_id) > max_len:
        return series_id[: max_len - 3] + "..."
    return series_id


@dataclass(frozen=True)
class SeriesPoints:
    series: TimeSeries
    points: Tuple[ChartPoint, ...]
    color: str
    label: str

    @property
    def series_id(self) -> str:
        return self.series.series_id


class ChartModel:
    def __init__(
        self,
        series: Sequence[TimeSeries] | None = None,
        *,
        max_series: int = settings.MAX_ACTIVE_SERIES,
        degenerate_span: float = settings.DEGENERATE_SPAN,
    ) -> None:
        self._max_series = max_series
        self._degenerate_span = degenerate_span if degenerate_span > 0 else 1.0
        self._entries: Tuple[SeriesPoints, ...] = ()
        self._min: Optional[float] = None
        self._max: Optional[float] = None
        self._revision = 0
        if series:
            self.set_series(series)

    # Mutation --------------------------------------------------------
    def set_series(self, series: Sequence[TimeSeries]) -> None:
        active = list(series)
        if len(active) > self._max_series:
            log.warning(
                "Chart accepts at most %d series; ignoring %d extra",
                self._max_series,
                len(active) - self._max_series,
            )
            active = active[: self._max_series]
        entries: List[SeriesPoints] = []
        lo: Optional[float] = None
        hi: Optional[float] = None
        for idx, ts in enumerate(active):
            points: List[ChartPoint] = []
            for ordinal, obs in enumerate(ts.get_all_observations()):
                v = parse_value(obs.value)
                if v is None:
                    continue
                points.append(ChartPoint(ordinal, v))
                if lo is None or v < lo:
                    lo = v
                if hi is None or v > hi:
                    hi = v
            entries.append(
                SeriesPoints(
                    series=ts,
                    points=tuple(points),
                    color=color_for_series(idx),
                    label=legend_label(ts.series_id),
                )
            )
        self._entries = tuple(entries)
        self._min, self._max = lo, hi
        self._revision += 1
        log.debug(
            "Chart model revision %d: %d series, range=%s..%s",
            self._revision,
            len(self._entries),
            lo,
            hi,
        )

    def clear(self) -> None:
        self.set_series([])

    # Queries ---------------------------------------------------------
    @property
    def revision(self) -> int:
        return self._revision

    @property
    def entries(self) -> Tuple[SeriesPoints, ...]:
        return self._entries

    @property
    def series(self) -> Tuple[TimeSeries, ...]:
        return tuple(e.series for e in self._entries)

    @property
    def min_value(self) -> Optional[float]:
        return self._min

    @property
    def max_value(self) -> Optional[float]:
        return self._max

    @property
    def state(self) -> ModelState:
        if not self._entries:
            return ModelState.EMPTY
        if self._min is None:
            return ModelState.NO_NUMERIC_DATA
        return ModelState.READY

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to plot (no series or no numeric point)."""
        return self.state is not ModelState.READY

    @property
    def has_series(self) -> bool:
        return bool(self._entries)

    def value_range(self) -> Optional[ValueRange]:
        """Effective y range; a zero-width range is widened around its value."""
        if self._min is None or self._max is None:
            return None
        if self._max > self._min:
            return ValueRange(self._min, self._max)
        v = self._min
        half = max(self._degenerate_span / 2.0, abs(v) * _RELATIVE_WIDEN)
        low = max(v - half, -sys.float_info.max)
        high = min(v + half, sys.float_info.max)
        return ValueRange(low, high, degenerate=True)

    def title(self) -> str:
        if len(self._entries) == 1:
            return self._entries[0].series.title or self._entries[0].series_id
        return f"Comparing {len(self._entries)} Series"

    def observation_for(self, series_index: int, point_index: int) -> Optional[Observation]:
        """Original observation behind a plotted point (None if out of range)."""
        if not 0 <= series_index < len(self._entries):
            return None
        entry = self._entries[series_index]
        if not 0 <= point_index < len(entry.points):
            return None
        return entry.series.observation_at(entry.points[point_index].ordinal)
