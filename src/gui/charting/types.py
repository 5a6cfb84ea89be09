"""Core charting value objects.

All types are plain frozen dataclasses with no Qt dependency so the chart
math can be exercised headless.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """Numeric data point.

    Attributes:
        ordinal: Index of the originating observation in the full series.
        value: Parsed finite value.
    """

    ordinal: int
    value: float


@dataclass(frozen=True, slots=True)
class DevicePoint:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ValueRange:
    """Value span used for the y axis.

    ``low``/``high`` are the effective bounds used by the projection; when
    ``degenerate`` is True they were widened around a single value.
    """

    low: float
    high: float
    degenerate: bool = False


@dataclass(frozen=True, slots=True)
class AxisTick:
    position: float  # device coordinate along the axis
    label: str


@dataclass(frozen=True, slots=True)
class LegendEntry:
    series_id: str
    label: str
    color: str


@dataclass(frozen=True)
class ProjectedSeries:
    """Device-space points of one series, index-aligned with its ChartPoints."""

    series_id: str
    color: str
    label: str
    points: Tuple[DevicePoint, ...] = ()

    @property
    def connect(self) -> bool:
        """Whether a renderer should join the points with a line."""
        return len(self.points) >= 2


@dataclass(frozen=True)
class ProjectionFrame:
    """Everything a renderer needs to draw one chart without the model."""

    width: float
    height: float
    margin: float
    title: str
    value_range: ValueRange | None
    series: Tuple[ProjectedSeries, ...] = ()
    y_ticks: Tuple[AxisTick, ...] = ()
    x_ticks: Tuple[AxisTick, ...] = ()
    legend: Tuple[LegendEntry, ...] = ()
    empty: bool = True

    @property
    def degenerate(self) -> bool:
        return bool(self.value_range and self.value_range.degenerate)

    @property
    def plot_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def plot_height(self) -> float:
        return self.height - 2 * self.margin

    @property
    def drawable(self) -> bool:
        return self.plot_width > 0 and self.plot_height > 0


@dataclass(frozen=True, slots=True)
class HoverHit:
    """Nearest-point lookup result used for tooltips and crosshairs."""

    series_index: int
    point_index: int
    series_id: str
    date: str
    value: str
    position: DevicePoint
    distance: float

    def tooltip(self) -> str:
        return f"{self.series_id}: {self.value} ({self.date})"


EMPTY_FRAME_TITLE = "No data to display. Fetch FRED data to see the chart."

__all__ = [
    "ChartPoint",
    "DevicePoint",
    "ValueRange",
    "AxisTick",
    "LegendEntry",
    "ProjectedSeries",
    "ProjectionFrame",
    "HoverHit",
    "EMPTY_FRAME_TITLE",
]

