"""Charting layer: model, projection and rendering helpers.

``ChartModel`` normalizes the active series onto a shared value range,
``ChartProjection`` maps it into a viewport and answers hover hit-tests.
Concrete renderers (the QPainter widget, the matplotlib PNG exporter) only
consume the ``ProjectionFrame`` they are handed.
"""

from .chart_model import ChartModel, ModelState, SeriesPoints  # noqa: F401
from .projection import ChartProjection  # noqa: F401
from .palette import ChartPalette, SERIES_COLORS, color_for_series  # noqa: F401
from .types import (  # noqa: F401
    ChartPoint,
    DevicePoint,
    HoverHit,
    ProjectedSeries,
    ProjectionFrame,
    ValueRange,
)
