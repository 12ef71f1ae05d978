"""Configuration constants for the ArticleGate fetch-and-classify pipeline.

This module centralizes all tunable parameters. To modify behavior:
- Edit values in this file directly
- Override via environment variables where supported (ARTICLEGATE_* prefix)

Common reasons to modify:
- Timeouts: Increase for slow sites or decrease for faster responses
- Parallelism: Adjust the CLI fan-out for different hardware
- Domain lists: Add publishers that never serve full text without a login
"""

import os

# =============================================================================
# HTTP Fetching
# =============================================================================

HTTP_TIMEOUT = float(os.environ.get("ARTICLEGATE_HTTP_TIMEOUT", "10.0"))  # Seconds, whole request

# Identity sent with every fetch
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; MirrorSource/1.0; +https://mirrorsource.app)",
    "Accept": "text/html,application/xhtml+xml",
}

# Status codes treated as an access gate rather than a broken page
ACCESS_DENIED_STATUSES = frozenset({401, 402, 403})


# =============================================================================
# Performance & Parallelism
# =============================================================================

# Concurrent fetches when the CLI is given several URLs.
# The pipeline itself has no limit; this only bounds the CLI's own fan-out.
MAX_CONCURRENCY = int(os.environ.get("ARTICLEGATE_MAX_CONCURRENCY", "5"))


# =============================================================================
# Content Limits
# =============================================================================

# These back the result invariants, so they are not environment-tunable.
PHRASE_SCAN_CHARS = 2000  # Paywall banners sit near the top of a document
MAX_CONTENT_CHARS = 8000
EXCERPT_CHARS = 500
SHORT_CONTENT_CHARS = 500  # Below this, gate language in the body means truncation


# =============================================================================
# Paywall Heuristics
# =============================================================================

# Known paywall domains - matched as substrings of the hostname, never fetched
KNOWN_PAYWALL_DOMAINS = (
    "nytimes.com",
    "wsj.com",
    "washingtonpost.com",
    "ft.com",
    "economist.com",
    "theatlantic.com",
    "newyorker.com",
    "bloomberg.com",
    "thetimes.co.uk",
    "telegraph.co.uk",
)

# Paywall indicator phrases (lowercase)
PAYWALL_PHRASES = (
    "subscribe to continue",
    "subscription required",
    "sign in to read",
    "become a member",
    "for subscribers only",
    "premium content",
    "paywall",
    "already a subscriber",
    "create an account to read",
)
