"""
Exception types raised by the crawler.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for every failure that aborts a crawl."""


class InvalidInputError(CrawlError, ValueError):
    """Seed URL is missing a scheme or a host."""


class FetchError(CrawlError):
    """A single HEAD/GET request could not be completed."""

    def __init__(self, message: str, url: Optional[str] = None, method: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url
        self.method = method


class ProtocolError(FetchError):
    """URL scheme is not http or https. Never retried."""


class NetworkError(FetchError):
    """Connection, DNS or timeout failure on one attempt."""


class RetriesExhaustedError(FetchError):
    """Every attempt for one request failed with a network error."""

    def __init__(self, message: str, url: Optional[str] = None, method: Optional[str] = None, attempts: int = 0) -> None:
        super().__init__(message, url=url, method=method)
        self.attempts = attempts
