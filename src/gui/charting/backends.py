"""Headless chart rendering via matplotlib (Agg).

Draws a ``ProjectionFrame`` in device coordinates so the exported image
matches what the interactive widget shows: same plot rect, same gridlines,
same per-series colors. Used by the CLI ``export-png`` command and by tests
that need an image without a display.
"""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from core.filesystem import ensure_parent, with_suffix
from .palette import ChartPalette
from .types import ProjectionFrame

__all__ = ["MatplotlibChartBackend"]

log = logging.getLogger(__name__)


class MatplotlibChartBackend:
    def __init__(self, palette: ChartPalette | None = None) -> None:
        self.palette = palette or ChartPalette()

    def create_figure(self, frame: ProjectionFrame, *, dpi: int = 100) -> Figure:
        w = max(1.0, float(frame.width))
        h = max(1.0, float(frame.height))
        fig = Figure(figsize=(w / dpi, h / dpi), dpi=dpi)
        FigureCanvasAgg(fig)
        fig.patch.set_facecolor(self.palette.role("card"))
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(0, w)
        ax.set_ylim(h, 0)  # device y grows downward
        ax.set_axis_off()
        text = self.palette.role("text.primary")

        if frame.empty:
            ax.text(
                w / 2,
                h / 2,
                frame.title,
                ha="center",
                va="center",
                fontsize=11,
                color=self.palette.role("text.secondary"),
            )
            return fig

        m = frame.margin
        ax.text(m, 30, frame.title, fontsize=11, fontweight="bold", color=text, va="baseline")

        # gridlines + y labels
        for tick in frame.y_ticks:
            ax.plot([m, w - m], [tick.position, tick.position], color=self.palette.role("grid.line"), lw=1)
            ax.text(10, tick.position + 5, tick.label, fontsize=8, color=text, va="baseline")

        # axes
        axis_color = self.palette.role("axis.line")
        ax.plot([m, m], [m, h - m], color=axis_color, lw=2)
        ax.plot([m, w - m], [h - m, h - m], color=axis_color, lw=2)

        for series in frame.series:
            xs = [p.x for p in series.points]
            ys = [p.y for p in series.points]
            if series.connect:
                ax.plot(xs, ys, color=series.color, lw=2)
            ax.scatter(xs, ys, s=8, color=series.color, zorder=3)

        for tick in frame.x_ticks:
            ax.text(tick.position - 20, h - m + 20, tick.label, fontsize=7, color=text, va="baseline")

        if len(frame.legend) > 1:
            lx, ly, lh = w - m - 200, m + 20, 25
            for i, entry in enumerate(frame.legend):
                top = ly + i * lh
                ax.add_patch(Rectangle((lx, top), 15, 15, facecolor=entry.color, edgecolor="black"))
                ax.text(lx + 20, top + 12, entry.label, fontsize=8, color=text, va="baseline")
        return fig

    def render_png(
        self,
        frame: ProjectionFrame,
        path: str | Path,
        *,
        dpi: int = 100,
        dark: bool | None = None,
    ) -> Path:
        """Write ``frame`` to ``path`` as PNG (``.png`` suffix enforced)."""
        if dark is not None:
            self.palette.set_dark(dark)
        out = ensure_parent(with_suffix(path, ".png"))
        fig = self.create_figure(frame, dpi=dpi)
        fig.savefig(str(out), format="png", dpi=dpi, facecolor=fig.get_facecolor())
        log.info("Chart exported to %s", out)
        return out
