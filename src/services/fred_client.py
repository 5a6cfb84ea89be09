"""Remote series fetch from the FRED web API.

Two GET requests per series: ``/series`` (metadata, a ``seriess`` array)
and ``/series/observations``. Both payloads are handed to
``TimeSeries.from_documents`` unparsed; no JSON tree is built here.

The API key is validated up front (non-empty, exactly 32 characters). A
payload carrying ``error_message`` (an unknown series id or a rejected key,
usually with status 400) is raised as ``FredApiError``.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Optional

import httpx

from config import settings
from core.http_client import HttpError, fetch_text
from domain.models import FetchParams
from domain.time_series import TimeSeries
from parsing.document_view import DocumentView

__all__ = ["FredApiError", "FredClient", "parse_date", "build_fetch_params", "api_key_from_env"]

log = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%d"


class FredApiError(RuntimeError):
    pass


def parse_date(text: str | None) -> Optional[date]:
    """``YYYY-MM-DD`` -> date; None for empty or malformed input."""
    if not text or not text.strip():
        return None
    try:
        return datetime.strptime(text.strip(), _DATE_FORMAT).date()
    except ValueError:
        return None


def build_fetch_params(series_id: str, start: str = "", end: str = "") -> FetchParams:
    """Validate user-entered fetch input; raises ValueError with a readable message."""
    sid = (series_id or "").strip()
    if not sid:
        raise ValueError("Series ID cannot be empty.")
    start_date = parse_date(start)
    end_date = parse_date(end)
    if (start or "").strip() and start_date is None:
        raise ValueError("Start date must be in YYYY-MM-DD format.")
    if (end or "").strip() and end_date is None:
        raise ValueError("End date must be in YYYY-MM-DD format.")
    if start_date and end_date and start_date > end_date:
        raise ValueError("Start date must not be after end date.")
    return FetchParams(sid, start_date, end_date)


def api_key_from_env() -> str:
    return os.environ.get(settings.FRED_API_KEY_ENV, "").strip()


class FredClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = settings.FRED_BASE_URL,
        timeout: float = settings.DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = self.validate_api_key(api_key)
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            headers={"User-Agent": settings.DEFAULT_USER_AGENT},
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def validate_api_key(key: str | None) -> str:
        k = (key or "").strip()
        if not k:
            raise FredApiError("API key cannot be empty.")
        if len(k) != settings.API_KEY_LENGTH:
            raise FredApiError(f"API key must be exactly {settings.API_KEY_LENGTH} characters.")
        return k

    # URLs ------------------------------------------------------------
    def _url(self, path: str, params: dict[str, str]) -> str:
        return str(httpx.URL(f"{self.base_url}/{path}", params=params))

    def series_url(self, series_id: str) -> str:
        return self._url(
            "series", {"series_id": series_id, "api_key": self.api_key, "file_type": "json"}
        )

    def observations_url(self, params: FetchParams) -> str:
        query = {"series_id": params.series_id, "api_key": self.api_key, "file_type": "json"}
        if params.start_date is not None:
            query["observation_start"] = params.start_date.strftime(_DATE_FORMAT)
        if params.end_date is not None:
            query["observation_end"] = params.end_date.strftime(_DATE_FORMAT)
        return self._url("series/observations", query)

    # Fetch ------------------------------------------------------------
    def _get(self, url: str) -> str:
        try:
            return fetch_text(url, client=self._client)
        except HttpError as e:
            # The API reports bad keys and unknown ids as 400 with a JSON body.
            message = DocumentView.parse(e.body).get_string("error_message")
            if message:
                raise FredApiError(message) from e
            raise

    def fetch_metadata_text(self, series_id: str) -> str:
        return self._get(self.series_url(series_id))

    def fetch_observations_text(self, params: FetchParams) -> str:
        return self._get(self.observations_url(params))

    def fetch_series(self, params: FetchParams) -> TimeSeries:
        series_id = params.series_id.strip()
        if not series_id:
            raise FredApiError("Series ID cannot be empty.")
        if series_id != params.series_id:
            params = FetchParams(series_id, params.start_date, params.end_date)
        log.info("Fetching series metadata for %s", series_id)
        meta = DocumentView.parse(self.fetch_metadata_text(series_id))
        error = meta.get_string("error_message")
        if error:
            raise FredApiError(error)
        log.info("Fetching series observations for %s", series_id)
        obs = DocumentView.parse(self.fetch_observations_text(params))
        error = obs.get_string("error_message")
        if error:
            raise FredApiError(error)
        ts = TimeSeries.from_documents(meta, obs, series_id=series_id)
        log.info("Fetched %s: %d observations", ts.series_id, ts.observation_count)
        return ts

    # Lifecycle -------------------------------------------------------
    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FredClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
