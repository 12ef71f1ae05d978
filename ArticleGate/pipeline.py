"""Fetch a URL, extract the article, and decide whether it sits behind a paywall.

The decision runs as a fixed sequence of stages. Each stage either hands its
output to the next one or raises ArticleFailure, which ends the run:

1. hostname denylist (no request is made for known paywalled publishers)
2. fetch and status-code classification
3. phrase scan over the raw HTML
4. readability extraction
5. whitespace cleanup and truncation
6. phrase scan over short extracted text

fetch_article_content() turns whatever happened into one ArticleResult and
never raises.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

import httpx

from .article_fetcher import FetchConfig, fetch_html
from .config import SHORT_CONTENT_CHARS
from .content_cleaner import extract_article
from .models import ArticleFailure, ArticleResult, ExtractedArticle, FailureKind
from .paywall_checks import is_known_paywall_domain, matched_paywall_phrase
from .text_cleanup import clean_article_text, make_excerpt, normalize_whitespace

logger = logging.getLogger(__name__)

Extractor = Callable[[str, str], Optional[ExtractedArticle]]

KNOWN_DOMAIN_ERROR = "Known paywall domain - skipping fetch"
CONTENT_PAYWALL_ERROR = "Paywall detected in content"
PARSE_ERROR = "Could not parse article content"
SHORT_CONTENT_ERROR = "Content too short - likely paywall truncated"


def check_domain(url: str) -> None:
    if is_known_paywall_domain(url):
        raise ArticleFailure(FailureKind.KNOWN_PAYWALL_DOMAIN, KNOWN_DOMAIN_ERROR)


def check_raw_html(html: str) -> None:
    phrase = matched_paywall_phrase(html)
    if phrase is not None:
        logger.debug("[paywall] raw HTML matched %r", phrase)
        raise ArticleFailure(FailureKind.CONTENT_PAYWALL_SIGNAL, CONTENT_PAYWALL_ERROR)


def require_article(article: Optional[ExtractedArticle]) -> ExtractedArticle:
    if article is None or not normalize_whitespace(article.text_content):
        raise ArticleFailure(FailureKind.PARSE_FAILURE, PARSE_ERROR)
    return article


def check_short_content(content: str, title: str) -> None:
    """Short text that still carries gate language is a truncated teaser.

    The headline usually makes it through such a gate, so the title is kept
    on the failure result while everything else is dropped.
    """
    if len(content) >= SHORT_CONTENT_CHARS:
        return
    phrase = matched_paywall_phrase(content)
    if phrase is not None:
        logger.debug("[paywall] %d-char content matched %r", len(content), phrase)
        raise ArticleFailure(FailureKind.SHORT_CONTENT_PAYWALL_SIGNAL, SHORT_CONTENT_ERROR, title=title)


async def _run_stages(
    url: str,
    config: FetchConfig | None,
    client: httpx.AsyncClient | None,
    extractor: Extractor,
) -> ArticleResult:
    check_domain(url)

    logger.info("[fetch] %s", url)
    html = await fetch_html(url, config, client)

    check_raw_html(html)

    # readability parsing is CPU-bound, run it off the event loop
    article = require_article(await asyncio.to_thread(extractor, html, url))
    title = article.title or ""

    content = clean_article_text(article.text_content)
    check_short_content(content, title)

    return ArticleResult.succeeded(
        title=title,
        content=content,
        excerpt=make_excerpt(content),
        byline=article.byline or None,
        site_name=article.site_name or None,
    )


async def fetch_article_content(
    url: str,
    *,
    config: FetchConfig | None = None,
    client: httpx.AsyncClient | None = None,
    extractor: Extractor = extract_article,
) -> ArticleResult:
    """Return the article at *url* or a failure record explaining why not.

    Failures are reported through ``success``, ``paywall_detected`` and
    ``error``; no exception escapes this coroutine apart from cancellation.
    """
    try:
        result = await _run_stages(url, config, client, extractor)
    except ArticleFailure as failure:
        result = ArticleResult.from_failure(failure)
        if failure.kind is FailureKind.TRANSPORT:
            logger.error("[fetch][ERROR] %s", failure)
        else:
            logger.warning("[result][%s] %s -> %s", failure.kind.label, url, failure.reason)
        return result
    except Exception as exc:
        logger.error("[unexpected][ERROR] %s -> %s", url, exc)
        return ArticleResult.failed(FailureKind.TRANSPORT, str(exc) or "Unknown error")

    logger.info("[result][success] %s (%d chars)", url, len(result.content))
    return result


__all__ = [
    "CONTENT_PAYWALL_ERROR",
    "KNOWN_DOMAIN_ERROR",
    "PARSE_ERROR",
    "SHORT_CONTENT_ERROR",
    "check_domain",
    "check_raw_html",
    "check_short_content",
    "fetch_article_content",
    "require_article",
]
