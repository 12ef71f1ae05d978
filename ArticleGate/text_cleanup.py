"""Whitespace cleanup and length limits for extracted article text."""
from __future__ import annotations

import re

from .config import EXCERPT_CHARS, MAX_CONTENT_CHARS

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str | None) -> str:
    """Collapse every whitespace run to a single space and trim the ends."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    return text[:limit]


def clean_article_text(text: str | None) -> str:
    """Return normalized text capped at MAX_CONTENT_CHARS."""
    return truncate(normalize_whitespace(text), MAX_CONTENT_CHARS)


def make_excerpt(content: str) -> str:
    return truncate(content, EXCERPT_CHARS)


__all__ = ["clean_article_text", "make_excerpt", "normalize_whitespace", "truncate"]
