"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from wordcrawler.config import (
    BACKOFF_BASE_S,
    DEFAULT_LIMIT,
    DEFAULT_TOP_N,
    DEFAULT_USER_AGENT,
    MAX_ATTEMPTS,
    MIN_WORD_LENGTH,
    TIMEOUT_S,
    CrawlConfig,
)
from wordcrawler.core import CrawlController, CrawlStats, build_fetcher, validate_seed_url
from wordcrawler.errors import CrawlError


def print_summary(stats: CrawlStats) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"HTML pages crawled:     {stats.pages_crawled}\n")
    sys.stderr.write(f"Non-HTML pages skipped: {stats.pages_skipped}\n")
    sys.stderr.write(f"URLs discovered:        {stats.urls_discovered}\n")
    sys.stderr.write(f"Requests made:          {stats.requests_made}\n")
    sys.stderr.write(f"Retries:                {stats.retries}\n\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the crawler CLI."""
    parser = argparse.ArgumentParser(
        prog="wordcrawler",
        description="Crawl same-domain links from a URL and report the most frequent words.",
    )
    parser.add_argument("start_url", help="Start URL (e.g. https://example.com)")
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help=f"Maximum HTML pages to scan (default: {DEFAULT_LIMIT})")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N, help=f"Number of words to report (default: {DEFAULT_TOP_N})")
    parser.add_argument(
        "--min-word-length",
        type=int,
        default=MIN_WORD_LENGTH,
        help=f"Shortest word that is counted (default: {MIN_WORD_LENGTH})",
    )
    parser.add_argument("--max-attempts", type=int, default=MAX_ATTEMPTS, help=f"Attempts per request (default: {MAX_ATTEMPTS})")
    parser.add_argument("--timeout", type=float, default=TIMEOUT_S, help=f"Request timeout in seconds (default: {TIMEOUT_S})")
    parser.add_argument(
        "--backoff",
        type=float,
        default=BACKOFF_BASE_S,
        help=f"First retry delay in seconds, doubled per attempt (default: {BACKOFF_BASE_S})",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--out", default="-", help="Output file path, or '-' for stdout (default: -)")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Log progress and print a summary")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s: %(message)s",
        level=logging.INFO if args.verbose else logging.WARNING,
    )

    config = CrawlConfig(
        limit=args.limit,
        top_n=args.top,
        min_word_length=args.min_word_length,
        max_attempts=args.max_attempts,
        timeout_s=args.timeout,
        backoff_base_s=args.backoff,
        user_agent=args.user_agent,
    )

    try:
        seed = validate_seed_url(args.start_url)
        controller = CrawlController(seed, build_fetcher(config), config)
        results = controller.run()
    except CrawlError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    if args.verbose:
        print_summary(controller.stats)

    payload = [asdict(r) for r in results]
    json_text = json.dumps(payload, ensure_ascii=False, indent=2 if args.pretty else None)

    if args.out == "-":
        print(json_text)
    else:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Results written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
