"""
Shared fixtures: an in-memory site standing in for the network.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from wordcrawler.errors import NetworkError
from wordcrawler.fetch import FetchResponse, RetryingFetcher


class FakeSite:
    """Serves canned pages by URL and records every request."""

    def __init__(self, pages: Dict[str, Tuple[Optional[str], str]]) -> None:
        self.pages = pages
        self.calls: List[Tuple[str, str]] = []

    def fetch(self, url: str, method: str) -> FetchResponse:
        self.calls.append((method, url))
        if url not in self.pages:
            raise NetworkError(f"connection refused: {url}", url=url, method=method)
        content_type, body = self.pages[url]
        headers = {"content-type": content_type} if content_type is not None else {}
        return FetchResponse(status_code=200, headers=headers, body=body if method == "GET" else "")

    def gets(self) -> List[str]:
        return [url for method, url in self.calls if method == "GET"]


def html_page(text: str, *hrefs: str) -> Tuple[str, str]:
    links = "".join(f'<a href="{href}">go</a>' for href in hrefs)
    return "text/html; charset=utf-8", f"<html><body><p>{text}</p>{links}</body></html>"


def make_response(body: bytes = b"<p>hello</p>", content_type="text/html", status_code=200):
    """Build a requests.Response the way HTTPAdapter.build_response does."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers = CaseInsensitiveDict({"Content-Type": content_type} if content_type else {})
    response.encoding = get_encoding_from_headers(response.headers)
    return response


def make_session(response=None):
    """Mocked requests.Session answering every request with response."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = response if response is not None else make_response()
    return session


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def make_fetcher(sleeps):
    """Build (site, retrying fetcher) for a page map, recording backoff sleeps."""
    def factory(pages):
        site = FakeSite(pages)
        return site, RetryingFetcher(site, sleep=sleeps.append)
    return factory


@pytest.fixture
def three_page_site():
    return {
        "http://example.com/": html_page("testing testing", "/two", "/three", "/"),
        "http://example.com/two": html_page("testing testing testing", "/", "http://example.com/three"),
        "http://example.com/three": html_page("testing testing testing testing testing", "/two"),
    }
