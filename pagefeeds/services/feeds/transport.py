"""HTTPS transport for upstream feeds.

All requests carry the identifying User-Agent; redirects are followed by the
client and every failure is mapped onto the ``FeedError`` taxonomy so callers
only ever need to handle one family of exceptions per region.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from pagefeeds.config import DEFAULT_USER_AGENT
from pagefeeds.errors import FetchConnectionError, FetchTimeoutError, NetworkError, ParseError

logger = logging.getLogger(__name__)


async def _require_https(request: httpx.Request) -> None:
    # runs for the initial request and for every redirect hop
    if request.url.scheme != "https":
        raise FetchConnectionError(f"Refusing non-https URL: {request.url}")


class Transport:
    def __init__(
        self,
        *,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = float(timeout)
        self.headers = {"User-Agent": user_agent}
        self.max_redirects = int(max_redirects)
        # injectable for tests (httpx.MockTransport)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self._transport,
            event_hooks={"request": [_require_https]},
        )

    async def __aenter__(self) -> "Transport":
        self._client = self._make_client()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """GET ``url`` and return the raw body of the final (post-redirect) response."""
        try:
            scheme = httpx.URL(url).scheme
        except httpx.InvalidURL as exc:
            raise FetchConnectionError(f"Invalid URL {url!r}: {exc}") from exc
        if scheme != "https":
            raise FetchConnectionError(f"Refusing non-https URL: {url}")

        if self._client is not None:
            return await self._get(self._client, url, headers)
        async with self._make_client() as client:
            return await self._get(client, url, headers)

    async def _get(self, client: httpx.AsyncClient, url: str, headers: Optional[Dict[str, str]]) -> bytes:
        logger.debug("GET %s", url)
        try:
            resp = await client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(f"Request timed out after {self.timeout:g}s: {url}") from exc
        except httpx.TooManyRedirects as exc:
            raise NetworkError(None, url, f"Too many redirects for {url}") from exc
        except httpx.DecodingError as exc:
            raise ParseError(f"Undecodable response body from {url}: {exc}") from exc
        except httpx.RequestError as exc:
            raise FetchConnectionError(f"{type(exc).__name__} for {url}: {exc}") from exc

        for hop in resp.history:
            logger.debug("redirect %s %s -> %s", hop.status_code, hop.url, hop.headers.get("location"))
        if not 200 <= resp.status_code < 300:
            raise NetworkError(resp.status_code, str(resp.url))
        return resp.content
