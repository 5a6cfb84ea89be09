"""Background worker threads used by the GUI."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from core.http_client import HttpError
from domain.models import FetchParams
from services.fred_client import FredApiError, FredClient

log = logging.getLogger(__name__)


class FetchWorker(QThread):
    """Fetch one series off the GUI thread.

    The result travels back through ``fetched`` (a queued connection when
    the receiver lives on the GUI thread), so the cache and chart model are
    only ever touched on the GUI thread.
    """

    fetched = pyqtSignal(object, str)  # TimeSeries | None, error
    progress = pyqtSignal(str)

    def __init__(self, client: FredClient, params: FetchParams):
        super().__init__()
        self.client = client
        self.params = params

    def run(self) -> None:  # type: ignore[override]
        self.progress.emit(f"Fetching data for series: {self.params.series_id}")
        try:
            ts = self.client.fetch_series(self.params)
        except (HttpError, FredApiError) as e:
            log.warning("Fetch failed for %s: %s", self.params.series_id, e)
            self.fetched.emit(None, str(e))
            return
        self.fetched.emit(ts, "")
