"""
Crawl control loop and data structures.
"""
from __future__ import annotations

import logging
from collections import Counter, deque
from dataclasses import dataclass, replace
from enum import Enum
from typing import Deque, List, Optional, Set
from urllib.parse import urlsplit

from wordcrawler.config import DEFAULT_LIMIT, DEFAULT_TOP_N, CrawlConfig
from wordcrawler.errors import InvalidInputError
from wordcrawler.fetch import Fetcher, RetryingFetcher
from wordcrawler.scanner import scan
from wordcrawler.words import WordFrequency, accumulate, top_k

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"
INVALID_URL_MESSAGE = "Please provide a url with a protocol and host"


class CrawlState(Enum):
    """Lifecycle of a crawl."""
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during crawl for summary output."""
    pages_crawled: int = 0
    pages_skipped: int = 0
    urls_discovered: int = 0
    requests_made: int = 0
    retries: int = 0


def validate_seed_url(url: Optional[str]) -> str:
    """
    Check that url has a scheme and a host and return it ready for the frontier.

    An empty path is written as "/" so the seed and links back to the site
    root share one visited-set key.
    """
    if not url or not isinstance(url, str):
        raise InvalidInputError(INVALID_URL_MESSAGE)
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise InvalidInputError(INVALID_URL_MESSAGE) from e
    if not parsed.scheme or not parsed.hostname:
        raise InvalidInputError(INVALID_URL_MESSAGE)

    if not parsed.path:
        parsed = parsed._replace(path="/")
    return parsed.geturl()


class CrawlController:
    """
    Breadth-first crawl of one site, one request in flight at a time.

    RUNNING while pages remain and the limit is not hit, DRAINING once the
    limit clears the frontier, DONE when the frontier is empty. Fetch errors
    are not caught here: a single failing page aborts the whole crawl.
    """

    def __init__(self, seed_url: str, fetcher: RetryingFetcher, config: Optional[CrawlConfig] = None) -> None:
        self.config = config or CrawlConfig()
        self.fetcher = fetcher
        self.frontier: Deque[str] = deque([seed_url])
        self.visited: Set[str] = {seed_url}
        self.frequencies: Counter = Counter()
        self.stats = CrawlStats(urls_discovered=1)
        self.state = CrawlState.RUNNING

    @property
    def pages_crawled(self) -> int:
        """Number of HTML pages scanned so far."""
        return self.stats.pages_crawled

    def step(self) -> CrawlState:
        """Process the next frontier entry and return the resulting state."""
        if not self.frontier:
            self.state = CrawlState.DONE
            return self.state

        url = self.frontier.popleft()
        head = self.fetcher.head(url)
        if not head.content_type.startswith(HTML_CONTENT_TYPE):
            logger.info("Skipping %s", url)
            self.stats.pages_skipped += 1
            return self.state

        logger.info("Processing %s", url)
        page = self.fetcher.get(url)
        result = scan(page.body, url)
        self.frequencies = accumulate(self.frequencies, result.text, self.config.min_word_length)
        self.stats.pages_crawled += 1

        if self.stats.pages_crawled >= self.config.limit:
            self.frontier.clear()
            self.state = CrawlState.DRAINING
            return self.state

        for link in result.links:
            if link not in self.visited:
                self.visited.add(link)
                self.frontier.append(link)
                self.stats.urls_discovered += 1

        return self.state

    def run(self) -> List[WordFrequency]:
        """Step until DONE and return the top words."""
        while self.state is not CrawlState.DONE:
            self.step()

        self.stats.requests_made = self.fetcher.requests_made
        self.stats.retries = self.fetcher.retries
        return top_k(self.frequencies, self.config.top_n)


def build_fetcher(config: CrawlConfig) -> RetryingFetcher:
    """Build a requests-backed retrying fetcher from config."""
    fetcher = Fetcher(timeout_s=config.timeout_s, user_agent=config.user_agent)
    return RetryingFetcher(fetcher, max_attempts=config.max_attempts, backoff_base_s=config.backoff_base_s)


def crawl(
    seed_url: str,
    limit: int = DEFAULT_LIMIT,
    top_n: int = DEFAULT_TOP_N,
    *,
    config: Optional[CrawlConfig] = None,
    fetcher: Optional[RetryingFetcher] = None,
) -> List[WordFrequency]:
    """
    Crawl same-domain pages from seed_url and return the most frequent words.

    Args:
        seed_url: Absolute URL with scheme and host to start from.
        limit: Maximum number of HTML pages to scan.
        top_n: Number of words to return.
        config: Remaining settings; its limit and top_n are overridden by the
                arguments above.
        fetcher: Fetch layer to use instead of a fresh requests-backed one.

    Returns:
        Up to top_n words, least frequent first.

    Raises:
        InvalidInputError: seed_url has no scheme or host.
        ProtocolError, FetchError, RetriesExhaustedError: a request failed.
    """
    seed = validate_seed_url(seed_url)
    settings = replace(config or CrawlConfig(), limit=limit, top_n=top_n)
    controller = CrawlController(seed, fetcher or build_fetcher(settings), settings)
    return controller.run()
