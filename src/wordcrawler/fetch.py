"""
HTTP fetch layer: one-shot requests and the retrying wrapper around them.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional
from urllib.parse import urlparse

import requests

from wordcrawler.config import BACKOFF_BASE_S, DEFAULT_USER_AGENT, MAX_ATTEMPTS, TIMEOUT_S
from wordcrawler.errors import FetchError, NetworkError, ProtocolError, RetriesExhaustedError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES: frozenset[str] = frozenset(("http", "https"))

# Failures worth another attempt
NETWORK_EXCEPTIONS = (
    requests.ConnectionError,
    requests.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


@dataclass(slots=True)
class FetchResponse:
    """Buffered response of a single request."""
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def content_type(self) -> str:
        """Content-Type header, empty when absent."""
        return self.headers.get("content-type") or ""


def decode_body(resp: requests.Response) -> str:
    """Decode with the charset named in Content-Type, else as UTF-8."""
    content_type = (resp.headers.get("content-type") or "").lower()
    if "charset=" in content_type:
        return resp.text
    return resp.content.decode("utf-8", errors="replace")


class Fetcher:
    """Issues exactly one HEAD or GET per call, without following redirects."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_s: float = TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.timeout_s = timeout_s

    def fetch(self, url: str, method: str) -> FetchResponse:
        """Send one request and buffer its body."""
        scheme = urlparse(url).scheme
        if scheme not in SUPPORTED_SCHEMES:
            raise ProtocolError(f"Unsupported protocol {scheme!r} in {url}", url=url, method=method)

        try:
            resp = self.session.request(method, url, timeout=self.timeout_s, allow_redirects=False)
            body = decode_body(resp)
        except NETWORK_EXCEPTIONS as e:
            raise NetworkError(f"{method} {url} failed: {e}", url=url, method=method) from e
        except requests.RequestException as e:
            raise FetchError(f"{method} {url} failed: {e}", url=url, method=method) from e

        return FetchResponse(status_code=resp.status_code, headers=resp.headers, body=body)


class RetryingFetcher:
    """
    Wraps a Fetcher with bounded retries and exponential backoff.

    Only NetworkError is retried. Before attempt ``i + 1`` the fetcher sleeps
    ``backoff_base_s * 2 ** i`` seconds (100 ms, 200 ms, ... by default).
    There is no sleep after the final attempt.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_base_s: float = BACKOFF_BASE_S,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.fetcher = fetcher
        self.max_attempts = max_attempts
        self.backoff_base_s = backoff_base_s
        self.sleep = sleep
        self.requests_made = 0
        self.retries = 0

    def backoff_delay(self, attempt_index: int) -> float:
        """Delay in seconds after the failed attempt with this 0-based index."""
        return self.backoff_base_s * (2 ** attempt_index)

    def fetch(self, url: str, method: str) -> FetchResponse:
        """Fetch url, retrying network failures with backoff."""
        last_error: Optional[NetworkError] = None

        for attempt in range(self.max_attempts):
            self.requests_made += 1
            try:
                return self.fetcher.fetch(url, method)
            except NetworkError as e:
                last_error = e
                logger.warning("Attempt %d/%d: %s", attempt + 1, self.max_attempts, e)
                if attempt + 1 < self.max_attempts:
                    delay = self.backoff_delay(attempt)
                    logger.info("Waiting %d ms before retrying %s", round(delay * 1000), url)
                    self.retries += 1
                    self.sleep(delay)

        raise RetriesExhaustedError(
            f"Maximum number of retries reached for {method} {url}",
            url=url,
            method=method,
            attempts=self.max_attempts,
        ) from last_error

    def head(self, url: str) -> FetchResponse:
        """HEAD url with retries."""
        return self.fetch(url, "HEAD")

    def get(self, url: str) -> FetchResponse:
        """GET url with retries."""
        return self.fetch(url, "GET")
