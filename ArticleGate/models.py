"""Result and failure types shared by the fetch pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(Enum):
    """Why a pipeline run ended without usable content."""

    KNOWN_PAYWALL_DOMAIN = ("known_paywall_domain", True)
    HTTP_ACCESS_DENIED = ("http_access_denied", True)
    HTTP_ERROR = ("http_error", False)
    CONTENT_PAYWALL_SIGNAL = ("content_paywall_signal", True)
    PARSE_FAILURE = ("parse_failure", False)
    SHORT_CONTENT_PAYWALL_SIGNAL = ("short_content_paywall_signal", True)
    TRANSPORT = ("transport", False)

    def __init__(self, label: str, is_paywall: bool) -> None:
        self.label = label
        self.is_paywall = is_paywall


class ArticleFailure(RuntimeError):
    """Raised by a pipeline stage to end the run with a failure result."""

    def __init__(self, kind: FailureKind, reason: str, *, title: str = "") -> None:
        super().__init__(reason)
        self.kind = kind
        self.reason = reason
        self.title = title


@dataclass(frozen=True, slots=True)
class ExtractedArticle:
    """What the readability pass hands back for one document."""

    title: str | None
    text_content: str | None
    byline: str | None = None
    site_name: str | None = None


@dataclass(frozen=True, slots=True)
class ArticleResult:
    """Outcome of one pipeline run, success or failure, built in one piece."""

    title: str
    content: str
    excerpt: str
    byline: str | None
    site_name: str | None
    success: bool
    paywall_detected: bool
    error: str | None = None
    failure_kind: FailureKind | None = None

    @classmethod
    def succeeded(
        cls,
        *,
        title: str,
        content: str,
        excerpt: str,
        byline: str | None,
        site_name: str | None,
    ) -> "ArticleResult":
        return cls(
            title=title,
            content=content,
            excerpt=excerpt,
            byline=byline,
            site_name=site_name,
            success=True,
            paywall_detected=False,
        )

    @classmethod
    def failed(cls, kind: FailureKind, error: str, *, title: str = "") -> "ArticleResult":
        """Build a terminal failure; only *title* survives from the extractor."""
        return cls(
            title=title,
            content="",
            excerpt="",
            byline=None,
            site_name=None,
            success=False,
            paywall_detected=kind.is_paywall,
            error=error,
            failure_kind=kind,
        )

    @classmethod
    def from_failure(cls, failure: ArticleFailure) -> "ArticleResult":
        return cls.failed(failure.kind, failure.reason, title=failure.title)

    def as_dict(self) -> dict:
        """Return the record keyed the way downstream mirroring jobs read it."""
        data = {
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "byline": self.byline,
            "siteName": self.site_name,
            "success": self.success,
            "paywallDetected": self.paywall_detected,
            "failureKind": self.failure_kind.label if self.failure_kind else None,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


__all__ = [
    "ArticleFailure",
    "ArticleResult",
    "ExtractedArticle",
    "FailureKind",
]
