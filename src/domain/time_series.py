"""Immutable economic time series (metadata + ordered observations).

A ``TimeSeries`` is built once, either from the two API payloads (series
metadata + observations) or from an explicit observation list supplied by
an import/store adapter, and is never mutated afterwards. Re-fetching a
series produces a new instance under the same id.

Observation values stay strings here. Numeric interpretation belongs to the
chart model, which drops missing-data markers such as ``"."``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from parsing.document_view import DocumentView
from .models import Observation, SeriesRecord

__all__ = ["TimeSeries", "IMPORTED_FREQUENCY", "IMPORTED_UNITS"]

IMPORTED_FREQUENCY = "Imported"
IMPORTED_UNITS = "Units"


class TimeSeries:
    __slots__ = ("_series_id", "_title", "_frequency", "_units", "_last_updated", "_observations")

    def __init__(
        self,
        series_id: str,
        observations: Iterable[Observation] = (),
        *,
        title: str = "",
        frequency: str = "",
        units: str = "",
        last_updated: str = "",
    ) -> None:
        self._series_id = series_id or ""
        self._title = title or ""
        self._frequency = frequency or ""
        self._units = units or ""
        self._last_updated = last_updated or ""
        self._observations: Tuple[Observation, ...] = tuple(observations)

    # Construction ----------------------------------------------------
    @classmethod
    def from_documents(
        cls,
        metadata: DocumentView,
        observations: DocumentView,
        *,
        series_id: str | None = None,
    ) -> "TimeSeries":
        """Build from the ``seriess`` metadata payload and ``observations`` payload.

        Only the first metadata row is used; an empty metadata array yields
        empty metadata fields. ``series_id`` fills in the id when the
        metadata row does not carry one.
        """
        rows = metadata.get_array("seriess")
        meta = rows[0] if rows else DocumentView.empty()
        obs = tuple(
            Observation(row.get_string("date"), row.get_string("value"))
            for row in observations.get_array("observations")
        )
        return cls(
            meta.get_string("id") or (series_id or ""),
            obs,
            title=meta.get_string("title"),
            frequency=meta.get_string("frequency"),
            units=meta.get_string("units"),
            last_updated=meta.get_string("last_updated"),
        )

    @classmethod
    def from_observations(
        cls,
        series_id: str,
        title: str,
        observations: Iterable[Observation | Tuple[str, str]],
        *,
        frequency: str = IMPORTED_FREQUENCY,
        units: str = IMPORTED_UNITS,
        last_updated: str = "",
    ) -> "TimeSeries":
        """Adapter path for user imports: explicit (date, value) pairs."""
        obs = tuple(o if isinstance(o, Observation) else Observation(o[0], o[1]) for o in observations)
        return cls(
            series_id,
            obs,
            title=title,
            frequency=frequency,
            units=units,
            last_updated=last_updated,
        )

    @classmethod
    def from_record(cls, record: SeriesRecord) -> "TimeSeries":
        return cls(
            record.series_id,
            record.observations,
            title=record.title,
            frequency=record.frequency,
            units=record.units,
            last_updated=record.last_updated,
        )

    # Metadata --------------------------------------------------------
    @property
    def series_id(self) -> str:
        return self._series_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def frequency(self) -> str:
        return self._frequency

    @property
    def units(self) -> str:
        return self._units

    @property
    def last_updated(self) -> str:
        return self._last_updated

    # Derived ---------------------------------------------------------
    @property
    def observation_count(self) -> int:
        return len(self._observations)

    @property
    def first_date(self) -> Optional[str]:
        return self._observations[0].date if self._observations else None

    @property
    def last_date(self) -> Optional[str]:
        return self._observations[-1].date if self._observations else None

    def get_all_observations(self) -> List[Observation]:
        return list(self._observations)

    def observation_at(self, index: int) -> Observation:
        return self._observations[index]

    def get_latest_observations(self, n: int) -> List[Observation]:
        """Up to ``n`` most recent observations, newest first."""
        if n <= 0:
            return []
        return list(reversed(self._observations[-n:]))

    def __len__(self) -> int:
        return len(self._observations)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"TimeSeries({self._series_id!r}, {len(self._observations)} observations)"
