"""Command line wrapper: fetch one or more URLs and print JSON results."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

# CRITICAL: Load .env BEFORE importing config module
# config.py reads environment variables during import, so .env must be loaded first
PACKAGE_ROOT = Path(__file__).resolve().parent
REPO_ROOT = PACKAGE_ROOT.parent
load_dotenv(REPO_ROOT / '.env', override=True)

import httpx

from .article_fetcher import FetchConfig
from .config import HTTP_TIMEOUT, MAX_CONCURRENCY
from .models import ArticleResult
from .pipeline import fetch_article_content


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch articles, extract readable text, and flag paywalled responses",
    )
    parser.add_argument("urls", nargs="+", metavar="URL", help="Article URL to fetch (may be repeated)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=HTTP_TIMEOUT,
        help=f"Seconds allowed for each fetch (default: {HTTP_TIMEOUT:g}, env ARTICLEGATE_HTTP_TIMEOUT)",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=MAX_CONCURRENCY,
        help=f"Maximum fetches in flight at once (default: {MAX_CONCURRENCY})",
    )
    parser.add_argument("--log-file", help="Optional path for a copy of the log")
    parser.add_argument("--verbose", action="store_true", help="Log per-stage debug detail")
    args = parser.parse_args(argv)
    if args.max_concurrency < 1:
        parser.error("--max-concurrency must be at least 1")
    return args


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    # stdout carries the JSON results, so logs go to stderr
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        handlers=handlers,
        force=True,
    )


async def fetch_many(
    urls: Sequence[str],
    fetch_cfg: FetchConfig,
    max_concurrency: int = MAX_CONCURRENCY,
) -> List[ArticleResult]:
    """Run the pipeline for every URL, at most *max_concurrency* at a time.

    Results come back in the same order as *urls*.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async with httpx.AsyncClient(follow_redirects=True) as client:
        async def run_one(url: str) -> ArticleResult:
            async with semaphore:
                return await fetch_article_content(url, config=fetch_cfg, client=client)

        return list(await asyncio.gather(*(run_one(url) for url in urls)))


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    fetch_cfg = FetchConfig(timeout=args.timeout)
    results = asyncio.run(fetch_many(args.urls, fetch_cfg, args.max_concurrency))

    for url, result in zip(args.urls, results):
        record = {"url": url, **result.as_dict()}
        print(json.dumps(record, ensure_ascii=False))

    succeeded = sum(1 for result in results if result.success)
    paywalled = sum(1 for result in results if result.paywall_detected)
    logging.info(
        "Run complete. %d/%d succeeded, %d paywalled",
        succeeded,
        len(results),
        paywalled,
    )
    return 0 if succeeded == len(results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
