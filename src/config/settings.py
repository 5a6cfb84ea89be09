"""Global configuration and constants for fetching and charting series."""

from __future__ import annotations

import os
from typing import Final

FRED_BASE_URL: Final = "https://api.stlouisfed.org/fred"
FRED_API_KEY_ENV: Final = "FRED_API_KEY"
API_KEY_LENGTH: Final = 32
API_KEY_HELP_URL: Final = "https://fred.stlouisfed.org/docs/api/api_key.html"
SERIES_BROWSE_URL: Final = "https://fred.stlouisfed.org/tags/series"
DEFAULT_USER_AGENT: Final = "fredcharts/0.1 (+https://fred.stlouisfed.org)"
DEFAULT_TIMEOUT: Final = 10  # seconds
DEFAULT_RETRIES: Final = 1
DEFAULT_BACKOFF_FACTOR: Final = 0.5

DATA_DIR: Final = os.environ.get("FREDCHARTS_DATA_DIR", "data")
DB_FILENAME: Final = "fred_series.sqlite3"

# Chart geometry / interaction
CHART_MARGIN: Final = 60  # px on every side of the plot area
HOVER_THRESHOLD_PX: Final = 15
MAX_ACTIVE_SERIES: Final = 5
DEGENERATE_SPAN: Final = 1.0  # nominal value span when min == max
Y_GRID_DIVISIONS: Final = 5
X_LABEL_TARGET: Final = 8
LEGEND_LABEL_MAX: Final = 20
LATEST_PREVIEW_COUNT: Final = 5


def default_db_path() -> str:
    return os.path.join(DATA_DIR, DB_FILENAME)
