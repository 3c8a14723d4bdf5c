"""
Crawl settings and their defaults.
"""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = 30
DEFAULT_TOP_N = 5
MIN_WORD_LENGTH = 5
MAX_ATTEMPTS = 3
TIMEOUT_S = 3.0
BACKOFF_BASE_S = 0.1
DEFAULT_USER_AGENT = "WordCrawler/1.0"


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """Tunables for a single crawl invocation."""
    limit: int = DEFAULT_LIMIT
    top_n: int = DEFAULT_TOP_N
    min_word_length: int = MIN_WORD_LENGTH
    max_attempts: int = MAX_ATTEMPTS
    timeout_s: float = TIMEOUT_S
    backoff_base_s: float = BACKOFF_BASE_S
    user_agent: str = DEFAULT_USER_AGENT
