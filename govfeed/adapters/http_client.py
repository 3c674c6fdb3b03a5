"""Async HTTP client for fetching portal pages.

This module provides a thin async GET client shared by all listing strategies,
translating transport and status errors into the adapter's exception types.
Retries and backoff are left to the caller.
"""

import logging
from typing import Any

import httpx

from govfeed.core.config import settings
from govfeed.core.exceptions import FeedParseError, UpstreamFetchError

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Async client for GET requests against the portal.

    Attributes:
        timeout: Request timeout in seconds
        client: Async HTTP client
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds (default from settings)
            user_agent: User-Agent header (default from settings)
            transport: Optional transport, used to stub the network in tests
        """
        self.timeout = timeout or settings.http_timeout

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": user_agent or settings.http_user_agent},
            follow_redirects=True,
            limits=httpx.Limits(max_connections=settings.http_max_connections),
            transport=transport,
        )

        logger.info(f"Initialized HttpFetcher with timeout={self.timeout}")

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self.client.aclose()
        logger.info("HttpFetcher closed")

    async def __aenter__(self) -> "HttpFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _get(self, url: str) -> httpx.Response:
        """Issue a GET request and check its status.

        Raises:
            UpstreamFetchError: On transport errors or non-success status
        """
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"GET {url} returned error status: {status_code}")
            raise UpstreamFetchError(
                f"Upstream returned {status_code} for {url}",
                url=url,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"GET {url} failed: {e}")
            raise UpstreamFetchError(f"Failed to fetch {url}: {e}", url=url) from e

    async def get_text(self, url: str) -> str:
        """Fetch a page and return its decoded body.

        Args:
            url: Absolute URL to fetch

        Returns:
            Response body as text
        """
        response = await self._get(url)
        logger.debug(f"Fetched {url} ({len(response.content)} bytes)")
        return response.text

    async def get_json(self, url: str) -> Any:
        """Fetch a URL and decode its JSON body.

        Args:
            url: Absolute URL to fetch

        Returns:
            Decoded JSON payload

        Raises:
            FeedParseError: If the body is not valid JSON
        """
        response = await self._get(url)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from {url}: {e}")
            raise FeedParseError(f"Malformed JSON from {url}: {e}") from e
