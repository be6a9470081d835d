"""Error taxonomy for feed fetching and page updates.

``FeedError`` subclasses are the anticipated per-region failures: the update
run catches them at the region boundary and treats the region as unchanged.
"""

from __future__ import annotations

from typing import Optional


class FeedError(Exception):
    """Base class for failures while fetching or parsing one upstream feed."""


class NetworkError(FeedError):
    def __init__(self, status_code: Optional[int], url: str, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"HTTP {status_code} for {url}")


class FetchTimeoutError(FeedError, TimeoutError):
    pass


class FetchConnectionError(FeedError, ConnectionError):
    pass


class ParseError(FeedError):
    """The payload as a whole could not be interpreted (e.g. invalid JSON)."""


class RegionNotFound(LookupError):
    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"Region not found: {selector}")
