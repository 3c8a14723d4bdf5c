"""
Same-domain web crawler that reports the most frequent long words on a site.
"""
from wordcrawler.core import crawl, CrawlController, CrawlState, CrawlStats
from wordcrawler.config import CrawlConfig
from wordcrawler.errors import (
    CrawlError,
    FetchError,
    InvalidInputError,
    NetworkError,
    ProtocolError,
    RetriesExhaustedError,
)
from wordcrawler.words import WordFrequency

__version__ = "1.0.0"
__all__ = [
    "crawl",
    "CrawlConfig",
    "CrawlController",
    "CrawlError",
    "CrawlState",
    "CrawlStats",
    "FetchError",
    "InvalidInputError",
    "NetworkError",
    "ProtocolError",
    "RetriesExhaustedError",
    "WordFrequency",
]
