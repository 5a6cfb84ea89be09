"""Chart projection: model points -> device coordinates, plus hit-testing.

Mapping rules for a viewport ``width x height`` with ``margin`` on each side
(plot area ``cw = width - 2*margin``, ``ch = height - 2*margin``):

 - x: the k-th plotted point of a series with n points sits at
   ``margin + cw * k / (n - 1)``; a lone point sits at the horizontal center
   of the plot area.
 - y: ``(height - margin) - ch * (value - low) / (high - low)`` using the
   model's effective value range (larger values are higher on screen). A
   degenerate range is widened by the model, so a flat series lands exactly
   at mid-height.

``project`` replaces the cached device points wholesale. ``find_nearest``
answers from that cache and reports no hit once the model has moved on to a
newer revision, so a stale cache is never queried.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from config import settings
from .chart_model import ChartModel
from .types import (
    AxisTick,
    DevicePoint,
    HoverHit,
    LegendEntry,
    ProjectedSeries,
    ProjectionFrame,
    EMPTY_FRAME_TITLE,
)

__all__ = ["ChartProjection", "project_x", "project_y"]

log = logging.getLogger(__name__)


def project_x(index: int, count: int, width: float, margin: float) -> float:
    cw = width - 2 * margin
    if count <= 1:
        return margin + cw / 2.0
    return margin + cw * index / (count - 1)


def project_y(value: float, low: float, high: float, height: float, margin: float) -> float:
    ch = height - 2 * margin
    # high - low may overflow for finite bounds
    span = high / 2.0 - low / 2.0
    if not span > 0:
        return margin + ch / 2.0
    return (height - margin) - ch * (value / 2.0 - low / 2.0) / span


class ChartProjection:
    """Projects a ChartModel into a viewport and caches the device points."""

    def __init__(self) -> None:
        self._model: ChartModel | None = None
        self._revision: int = -1
        self._frame: ProjectionFrame | None = None
        self._screen: Tuple[Tuple[DevicePoint, ...], ...] = ()

    # Projection ------------------------------------------------------
    def project(
        self,
        model: ChartModel,
        width: float,
        height: float,
        margin: float = settings.CHART_MARGIN,
    ) -> ProjectionFrame:
        self.invalidate()
        vr = model.value_range()
        if vr is None:
            frame = ProjectionFrame(
                width=width,
                height=height,
                margin=margin,
                title=EMPTY_FRAME_TITLE if not model.has_series else model.title(),
                value_range=None,
                legend=self._legend(model),
                empty=True,
            )
            self._remember(model, frame)
            return frame

        projected: List[ProjectedSeries] = []
        for entry in model.entries:
            n = len(entry.points)
            pts = tuple(
                DevicePoint(
                    project_x(k, n, width, margin),
                    project_y(p.value, vr.low, vr.high, height, margin),
                )
                for k, p in enumerate(entry.points)
            )
            projected.append(
                ProjectedSeries(
                    series_id=entry.series_id, color=entry.color, label=entry.label, points=pts
                )
            )

        frame = ProjectionFrame(
            width=width,
            height=height,
            margin=margin,
            title=model.title(),
            value_range=vr,
            series=tuple(projected),
            y_ticks=self._y_ticks(vr.low, vr.high, height, margin),
            x_ticks=self._x_ticks(model, projected),
            legend=self._legend(model),
            empty=False,
        )
        self._remember(model, frame)
        if not frame.drawable:
            log.debug("Viewport %sx%s leaves no drawable plot area", width, height)
        return frame

    def invalidate(self) -> None:
        self._model = None
        self._revision = -1
        self._frame = None
        self._screen = ()

    @property
    def frame(self) -> ProjectionFrame | None:
        return None if self.is_stale() else self._frame

    def is_stale(self) -> bool:
        return self._model is None or self._model.revision != self._revision

    # Hit testing -----------------------------------------------------
    def find_nearest(
        self,
        pointer: DevicePoint | Sequence[float],
        threshold: float = settings.HOVER_THRESHOLD_PX,
    ) -> Optional[HoverHit]:
        """Closest cached point strictly within ``threshold`` pixels.

        Scans series in active order, then points by index; only a strictly
        smaller distance replaces the current best, so equal distances resolve
        to the first point encountered.
        """
        if self.is_stale() or not self._screen:
            return None
        if isinstance(pointer, DevicePoint):
            px, py = pointer.x, pointer.y
        else:
            px, py = float(pointer[0]), float(pointer[1])
        best = float(threshold)
        hit: Tuple[int, int] | None = None
        for s, pts in enumerate(self._screen):
            for i, p in enumerate(pts):
                d = math.hypot(px - p.x, py - p.y)
                if d < best:
                    best = d
                    hit = (s, i)
        if hit is None:
            return None
        s, i = hit
        model = self._model
        assert model is not None
        obs = model.observation_for(s, i)
        if obs is None:  # pragma: no cover - cache and model are revision-locked
            return None
        return HoverHit(
            series_index=s,
            point_index=i,
            series_id=model.entries[s].series_id,
            date=obs.date,
            value=obs.value,
            position=self._screen[s][i],
            distance=best,
        )

    # Internal --------------------------------------------------------
    def _remember(self, model: ChartModel, frame: ProjectionFrame) -> None:
        self._model = model
        self._revision = model.revision
        self._frame = frame
        self._screen = tuple(ps.points for ps in frame.series)

    @staticmethod
    def _y_ticks(low: float, high: float, height: float, margin: float) -> Tuple[AxisTick, ...]:
        divisions = settings.Y_GRID_DIVISIONS
        ch = height - 2 * margin
        ticks = []
        for i in range(divisions + 1):
            t = i / divisions
            value = high * (1 - t) + low * t
            ticks.append(AxisTick(position=margin + ch * t, label=f"{value:.2f}"))
        return tuple(ticks)

    @staticmethod
    def _x_ticks(model: ChartModel, projected: Sequence[ProjectedSeries]) -> Tuple[AxisTick, ...]:
        if not projected or not projected[0].points:
            return ()
        entry = model.entries[0]
        pts = projected[0].points
        step = max(1, len(pts) // settings.X_LABEL_TARGET)
        return tuple(
            AxisTick(position=pts[k].x, label=entry.series.observation_at(entry.points[k].ordinal).date)
            for k in range(0, len(pts), step)
        )

    @staticmethod
    def _legend(model: ChartModel) -> Tuple[LegendEntry, ...]:
        return tuple(
            LegendEntry(series_id=e.series_id, label=e.label, color=e.color) for e in model.entries
        )
