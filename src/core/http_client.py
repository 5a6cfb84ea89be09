"""Blocking HTTP GET helper built on httpx, with simple retry logic.

Transport failures (connection errors, timeouts) are retried with
exponential backoff. A completed response with a non-200 status is not
retried; it raises ``HttpError`` carrying the status code.
"""

from __future__ import annotations

import logging
import time
from typing import Mapping, Optional

import httpx

from config import settings

__all__ = ["HttpError", "fetch_text"]

log = logging.getLogger(__name__)


class HttpError(RuntimeError):
    def __init__(
        self, message: str, *, status_code: int | None = None, body: str = ""
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def fetch_text(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    client: Optional[httpx.Client] = None,
    transport: httpx.BaseTransport | None = None,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    retries: int | None = None,
    backoff_factor: float | None = None,
) -> str:
    """GET ``url`` and return the decoded body.

    A caller-supplied ``client`` is used as-is and left open; otherwise a
    short-lived client is created (optionally on ``transport``, which tests
    use to plug in ``httpx.MockTransport``).
    """
    retries = retries if retries is not None else settings.DEFAULT_RETRIES
    backoff_factor = (
        backoff_factor if backoff_factor is not None else settings.DEFAULT_BACKOFF_FACTOR
    )
    close_client = False
    if client is None:
        client = httpx.Client(
            headers={"User-Agent": user_agent or settings.DEFAULT_USER_AGENT},
            timeout=timeout or settings.DEFAULT_TIMEOUT,
            transport=transport,
        )
        close_client = True
    try:
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = client.get(url, params=params)
            except (httpx.TimeoutException, httpx.TransportError) as e:
                if attempt > retries:
                    raise HttpError(f"Failed to fetch {url}: {e}") from e
                sleep_for = backoff_factor * (2 ** (attempt - 1))
                log.warning(
                    "Attempt %d/%d failed for %s: %s. Retrying in %.1fs",
                    attempt,
                    retries + 1,
                    url,
                    e,
                    sleep_for,
                )
                time.sleep(sleep_for)
                continue
            if resp.status_code != 200:
                raise HttpError(
                    f"HTTP request failed with code: {resp.status_code}",
                    status_code=resp.status_code,
                    body=resp.text,
                )
            log.debug("GET %s%s -> %d bytes", resp.url.host, resp.url.path, len(resp.content))
            return resp.text
    finally:
        if close_client:
            client.close()
