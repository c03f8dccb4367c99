"""HTTP fetcher backed by requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException

from .config import DiscoverConfig
from .errors import FetchError
from .models import FetchResponse
from .validation import is_supported_url


def make_session(user_agent: str, pool_size: int = 10) -> Session:
    """Create a requests session sized for the given number of parallel fetches."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class RequestsFetcher:
    """Requests-based fetcher that follows redirects and never raises on HTTP status."""

    def __init__(
        self,
        *,
        session: Session,
        timeout: float,
        logger: logging.Logger,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> FetchResponse:
        if not is_supported_url(url):
            raise FetchError(f"Unsupported URL: {url}")
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers or {}),
                timeout=self._timeout,
                allow_redirects=True,
            )
        except RequestException as exc:
            self._logger.debug("Fetch failed for %s: %s", url, exc)
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc
        self._logger.debug("Fetched %s -> %s (%d)", url, response.url, response.status_code)
        return FetchResponse(
            url=str(response.url),
            status=response.status_code,
            status_text=str(response.reason or ""),
            headers=response.headers,
            body=str(response.text),
        )


def build_fetcher(config: DiscoverConfig, logger: logging.Logger) -> RequestsFetcher:
    """Build the default requests-backed fetcher for a configuration."""
    return RequestsFetcher(
        session=make_session(config.user_agent, pool_size=config.concurrency),
        timeout=config.request_timeout,
        logger=logger,
    )
