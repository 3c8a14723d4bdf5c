"""
Callback-style entry point for hosts that pass a request query.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from wordcrawler.core import crawl, validate_seed_url
from wordcrawler.errors import CrawlError, InvalidInputError


def start_crawler(query: Mapping[str, Any], callback: Callable[..., Any]) -> Any:
    """
    Crawl query["url"] with default settings and report through callback.

    Calls ``callback({"error": exc})`` on failure or ``callback(None, results)``
    on success, and returns whatever the callback returns.
    """
    try:
        url = validate_seed_url(query.get("url"))
    except InvalidInputError as e:
        return callback({"error": e})

    try:
        results = crawl(url)
    except CrawlError as e:
        return callback({"error": e})
    return callback(None, results)
