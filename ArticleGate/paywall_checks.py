"""Cheap paywall heuristics applied before and after extraction.

Two checks live here:
- a hostname denylist consulted before any network traffic, and
- a bounded phrase scan run over raw HTML and again over short extracted text.

Both read the immutable lists in config.py, so they are safe to call from
any number of concurrent pipeline runs.
"""
from __future__ import annotations

import logging
from urllib.parse import urlparse

from .config import KNOWN_PAYWALL_DOMAINS, PAYWALL_PHRASES, PHRASE_SCAN_CHARS

logger = logging.getLogger(__name__)


def is_known_paywall_domain(url: str) -> bool:
    """Return True when the URL's hostname contains a denylisted domain.

    Matching is a substring test on the lowercased hostname, so
    ``nytimes.com.example.org`` is flagged too. Unparseable URLs are not
    flagged (fail open); the fetch decides what happens to them.
    """
    try:
        hostname = urlparse(url).hostname
    except (TypeError, ValueError) as exc:
        logger.debug("[paywall] could not parse %r: %s", url, exc)
        return False

    if not hostname:
        return False

    hostname = hostname.lower()
    return any(domain in hostname for domain in KNOWN_PAYWALL_DOMAINS)


def matched_paywall_phrase(text: str | None) -> str | None:
    """Return the first indicator phrase found near the top of *text*."""
    if not text:
        return None

    head = text.lower()[:PHRASE_SCAN_CHARS]
    for phrase in PAYWALL_PHRASES:
        if phrase in head:
            return phrase
    return None


def detect_paywall_in_content(text: str | None) -> bool:
    return matched_paywall_phrase(text) is not None


__all__ = [
    "detect_paywall_in_content",
    "is_known_paywall_domain",
    "matched_paywall_phrase",
]
