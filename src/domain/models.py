"""Domain models for fetched and imported economic series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Observation:
    date: str
    value: str


@dataclass(frozen=True, slots=True)
class FetchParams:
    series_id: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(slots=True)
class SeriesRecord:
    """Persisted shape of a series (store hydration / save path).

    Structurally identical to what the import adapters produce, so a single
    ``TimeSeries.from_record`` adapter covers every source.
    """

    series_id: str
    title: str = ""
    frequency: str = ""
    units: str = ""
    last_updated: str = ""
    observations: Tuple[Observation, ...] = ()
    first_date: Optional[str] = None
    last_date: Optional[str] = None
    created_at: Optional[float] = None

    @property
    def observation_count(self) -> int:
        return len(self.observations)

    @classmethod
    def from_time_series(cls, ts: Any, *, created_at: float | None = None) -> "SeriesRecord":
        return cls(
            series_id=ts.series_id,
            title=ts.title,
            frequency=ts.frequency,
            units=ts.units,
            last_updated=ts.last_updated,
            observations=tuple(ts.get_all_observations()),
            first_date=ts.first_date,
            last_date=ts.last_date,
            created_at=created_at,
        )

    def observations_as_dicts(self) -> List[Dict[str, str]]:
        return [{"date": o.date, "value": o.value} for o in self.observations]


@dataclass(slots=True)
class ImportedSeries:
    """Result of reading a user data file before it becomes a TimeSeries."""

    series_id: str
    source: str
    observations: List[Observation] = field(default_factory=list)
