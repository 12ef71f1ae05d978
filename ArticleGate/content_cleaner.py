"""Pull the main article out of raw HTML with readability-lxml."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from lxml.etree import ParserError
from readability import Document
from readability.readability import Unparseable

from .models import ExtractedArticle
from .text_cleanup import normalize_whitespace

logger = logging.getLogger(__name__)

_NO_TITLE = "[no-title]"

# (tag, attrs, attribute holding the value; None means element text)
_BYLINE_SOURCES: Iterable[tuple] = (
    ("meta", {"name": "author"}, "content"),
    ("meta", {"property": "article:author"}, "content"),
    (None, {"rel": "author"}, None),
    (None, {"itemprop": "author"}, None),
    (None, {"class": re.compile("byline", re.IGNORECASE)}, None),
)

_SITE_NAME_SOURCES: Iterable[tuple] = (
    ("meta", {"property": "og:site_name"}, "content"),
    ("meta", {"name": "application-name"}, "content"),
)


def _sanitize_html(html: str) -> str:
    """Remove NULL bytes and control characters that break lxml parsing.

    lxml requires XML-compatible strings: Unicode or ASCII with no NULL bytes
    or control characters (except tab, newline, carriage return).
    """
    html = html.replace('\x00', '')
    return re.sub(r'[\x01-\x08\x0B-\x0C\x0E-\x1F]', '', html)


def extract_article(html: str, url: str = "") -> Optional[ExtractedArticle]:
    """Return title, text, byline and site name, or None if unparseable."""
    html = _sanitize_html(html)

    try:
        document = Document(html, url=url or None)
        main_html = document.summary(html_partial=True)
        title = document.short_title()
    except (Unparseable, ParserError) as exc:
        logger.debug("[extract] readability could not parse %s: %s", url, exc)
        return None

    text = BeautifulSoup(main_html, "html.parser").get_text(" ")
    page = BeautifulSoup(html, "html.parser")

    if title == _NO_TITLE:
        title = ""

    article = ExtractedArticle(
        title=normalize_whitespace(title or "") or None,
        text_content=text,
        byline=_first_value(page, _BYLINE_SOURCES),
        site_name=_first_value(page, _SITE_NAME_SOURCES),
    )
    logger.debug("[extract] %s -> %d chars of text", url, len(text))
    return article


def _first_value(page: BeautifulSoup, sources: Iterable[tuple]) -> Optional[str]:
    for tag_name, attrs, attribute in sources:
        node = page.find(tag_name, attrs=attrs) if tag_name else page.find(attrs=attrs)
        if node is None:
            continue
        raw = node.get(attribute, "") if attribute else node.get_text(" ")
        value = normalize_whitespace(raw)
        if value:
            return value
    return None


__all__ = ["extract_article"]
