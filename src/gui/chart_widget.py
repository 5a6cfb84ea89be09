"""Interactive line chart widget.

Paints the ``ProjectionFrame`` produced by ``ChartProjection`` with
QPainter. The frame is recomputed whenever the model or the widget size
changes, so hover queries always run against points projected for the
current revision and viewport.

Hover: on every mouse move the nearest cached point within
``HOVER_THRESHOLD_PX`` is highlighted, a tooltip ``"<id>: <value> (<date>)"``
is drawn next to it and a dashed crosshair is shown through the pointer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QFontMetrics, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from config import settings
from core.filesystem import ensure_parent, with_suffix
from domain.time_series import TimeSeries
from gui.charting import ChartModel, ChartPalette, ChartProjection, HoverHit, ProjectionFrame

__all__ = ["ChartWidget"]

log = logging.getLogger(__name__)


class ChartWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None, *, dark: bool = False):
        super().__init__(parent)
        self.setObjectName("chartWidget")
        self.setMouseTracking(True)
        self.setMinimumSize(400, 300)
        self._model = ChartModel()
        self._projection = ChartProjection()
        self._palette = ChartPalette(dark=dark)
        self._hover: Optional[HoverHit] = None
        self._pointer: Optional[QPointF] = None

    # Data ------------------------------------------------------------
    @property
    def model(self) -> ChartModel:
        return self._model

    @property
    def projection(self) -> ChartProjection:
        return self._projection

    @property
    def hover(self) -> Optional[HoverHit]:
        return self._hover

    def set_series(self, series: Sequence[TimeSeries]) -> None:
        self._model.set_series(series)
        self._hover = None
        self._reproject()
        self.update()

    def set_data(self, ts: TimeSeries) -> None:
        self.set_series([ts])

    def clear_data(self) -> None:
        self.set_series([])

    def set_dark(self, dark: bool) -> None:
        self._palette.set_dark(dark)
        self.update()

    def current_frame(self) -> ProjectionFrame:
        frame = self._projection.frame
        if frame is None or frame.width != self.width() or frame.height != self.height():
            self._hover = None
            frame = self._reproject()
        return frame

    def _reproject(self) -> ProjectionFrame:
        return self._projection.project(self._model, self.width(), self.height())

    # Export ----------------------------------------------------------
    def export_png(self, path: str | Path) -> Path:
        out = ensure_parent(with_suffix(path, ".png"))
        if not self.grab().save(str(out), "PNG"):
            raise OSError(f"Could not write image to {out}")
        log.info("Chart exported to %s", out)
        return out

    # Qt events -------------------------------------------------------
    def resizeEvent(self, event):  # type: ignore[override]
        self._hover = None
        self._reproject()
        super().resizeEvent(event)

    def mouseMoveEvent(self, event):  # type: ignore[override]
        pos = event.position()
        self.update_hover(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):  # type: ignore[override]
        self._pointer = None
        self._hover = None
        self.update()
        super().leaveEvent(event)

    def update_hover(self, x: float, y: float) -> Optional[HoverHit]:
        """Recompute the hover target for a pointer at ``(x, y)``."""
        self.current_frame()
        self._pointer = QPointF(x, y)
        self._hover = self._projection.find_nearest((x, y), settings.HOVER_THRESHOLD_PX)
        self.update()
        return self._hover

    # Painting --------------------------------------------------------
    def paintEvent(self, event):  # type: ignore[override]
        frame = self.current_frame()
        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            p.fillRect(self.rect(), QColor(self._palette.role("card")))
            if frame.empty or not frame.drawable:
                self._paint_placeholder(p, frame)
                return
            self._paint_title(p, frame)
            self._paint_grid(p, frame)
            self._paint_axes(p, frame)
            self._paint_series(p, frame)
            self._paint_x_labels(p, frame)
            if len(frame.legend) > 1:
                self._paint_legend(p, frame)
            if self._hover is not None:
                self._paint_hover(p, frame, self._hover)
            if self._pointer is not None:
                self._paint_crosshair(p, frame, self._pointer)
        finally:
            p.end()

    def _paint_placeholder(self, p: QPainter, frame: ProjectionFrame) -> None:
        p.setPen(QColor(self._palette.role("text.secondary")))
        p.setFont(QFont("Segoe UI", 14))
        message = frame.title if frame.empty else "Window too small to draw the chart."
        p.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, message)

    def _paint_title(self, p: QPainter, frame: ProjectionFrame) -> None:
        p.setPen(QColor(self._palette.role("text.primary")))
        p.setFont(QFont("Segoe UI", 14, QFont.Weight.Bold))
        p.drawText(QPointF(frame.margin, 30), frame.title)

    def _paint_grid(self, p: QPainter, frame: ProjectionFrame) -> None:
        m, w = frame.margin, frame.width
        p.setFont(QFont("Segoe UI", 10))
        for tick in frame.y_ticks:
            p.setPen(QPen(QColor(self._palette.role("grid.line")), 1))
            p.drawLine(QPointF(m, tick.position), QPointF(w - m, tick.position))
            p.setPen(QColor(self._palette.role("text.primary")))
            p.drawText(QPointF(10, tick.position + 5), tick.label)

    def _paint_axes(self, p: QPainter, frame: ProjectionFrame) -> None:
        m, w, h = frame.margin, frame.width, frame.height
        p.setPen(QPen(QColor(self._palette.role("axis.line")), 2))
        p.drawLine(QPointF(m, m), QPointF(m, h - m))
        p.drawLine(QPointF(m, h - m), QPointF(w - m, h - m))

    def _paint_series(self, p: QPainter, frame: ProjectionFrame) -> None:
        for series in frame.series:
            color = QColor(series.color)
            p.setPen(QPen(color, 2))
            if series.connect:
                for a, b in zip(series.points, series.points[1:]):
                    p.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))
            p.setBrush(color)
            for pt in series.points:
                p.drawEllipse(QPointF(pt.x, pt.y), 3, 3)
        p.setBrush(Qt.BrushStyle.NoBrush)

    def _paint_x_labels(self, p: QPainter, frame: ProjectionFrame) -> None:
        p.setPen(QColor(self._palette.role("text.primary")))
        p.setFont(QFont("Segoe UI", 9))
        y = frame.height - frame.margin + 20
        for tick in frame.x_ticks:
            p.drawText(QPointF(tick.position - 20, y), tick.label)

    def _paint_legend(self, p: QPainter, frame: ProjectionFrame) -> None:
        lx = frame.width - frame.margin - 200
        ly = frame.margin + 20
        p.setFont(QFont("Segoe UI", 10))
        for i, entry in enumerate(frame.legend):
            top = ly + i * 25
            p.setPen(QColor("black"))
            p.setBrush(QColor(entry.color))
            p.drawRect(QRectF(lx, top, 15, 15))
            p.setPen(QColor(self._palette.role("text.primary")))
            p.drawText(QPointF(lx + 20, top + 12), entry.label)
        p.setBrush(Qt.BrushStyle.NoBrush)

    def _paint_hover(self, p: QPainter, frame: ProjectionFrame, hit: HoverHit) -> None:
        color = QColor(frame.series[hit.series_index].color)
        pos = QPointF(hit.position.x, hit.position.y)
        p.setPen(QPen(color, 2))
        p.setBrush(QColor(self._palette.role("card")))
        p.drawEllipse(pos, 6, 6)
        p.setBrush(color)
        p.drawEllipse(pos, 3, 3)

        text = hit.tooltip()
        p.setFont(QFont("Segoe UI", 10))
        fm = QFontMetrics(p.font())
        tw = fm.horizontalAdvance(text) + 10
        th = fm.height() + 6
        tx = min(pos.x() + 10, frame.width - tw - 5)
        ty = max(pos.y() - th - 10, 5)
        p.setPen(QColor(0, 0, 0, 180))
        p.setBrush(QColor(0, 0, 0, 180))
        p.drawRoundedRect(QRectF(tx, ty, tw, th), 5, 5)
        p.setPen(QColor("white"))
        p.drawText(QPointF(tx + 5, ty + th - fm.descent() - 3), text)
        p.setBrush(Qt.BrushStyle.NoBrush)

    def _paint_crosshair(self, p: QPainter, frame: ProjectionFrame, pointer: QPointF) -> None:
        m, w, h = frame.margin, frame.width, frame.height
        if not (m <= pointer.x() <= w - m and m <= pointer.y() <= h - m):
            return
        pen = QPen(QColor(self._palette.role("grid.line")), 1, Qt.PenStyle.DashLine)
        p.setPen(pen)
        p.drawLine(QPointF(pointer.x(), m), QPointF(pointer.x(), h - m))
        p.drawLine(QPointF(m, pointer.y()), QPointF(w - m, pointer.y()))
