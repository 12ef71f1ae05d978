from __future__ import annotations

import dataclasses

import pytest

from ArticleGate.models import ArticleFailure, ArticleResult, FailureKind


def test_paywall_attribution_per_failure_kind():
    paywall = {kind for kind in FailureKind if kind.is_paywall}

    assert paywall == {
        FailureKind.KNOWN_PAYWALL_DOMAIN,
        FailureKind.HTTP_ACCESS_DENIED,
        FailureKind.CONTENT_PAYWALL_SIGNAL,
        FailureKind.SHORT_CONTENT_PAYWALL_SIGNAL,
    }


def test_failed_result_clears_everything_but_title():
    failure = ArticleFailure(FailureKind.SHORT_CONTENT_PAYWALL_SIGNAL, "too short", title="Headline")

    result = ArticleResult.from_failure(failure)

    assert result.title == "Headline"
    assert (result.content, result.excerpt) == ("", "")
    assert (result.byline, result.site_name) == (None, None)
    assert result.success is False
    assert result.paywall_detected is True
    assert result.error == "too short"


def test_result_is_immutable():
    result = ArticleResult.failed(FailureKind.TRANSPORT, "boom")

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.success = True


def test_as_dict_uses_caller_field_names():
    ok = ArticleResult.succeeded(
        title="T", content="body", excerpt="body", byline="B", site_name="S"
    ).as_dict()
    failed = ArticleResult.failed(FailureKind.PARSE_FAILURE, "Could not parse article content").as_dict()

    assert ok == {
        "title": "T",
        "content": "body",
        "excerpt": "body",
        "byline": "B",
        "siteName": "S",
        "success": True,
        "paywallDetected": False,
        "failureKind": None,
    }
    assert failed["error"] == "Could not parse article content"
    assert failed["failureKind"] == "parse_failure"
    assert failed["paywallDetected"] is False


def test_result_record_is_documented():
    assert ArticleResult.__doc__ and "pipeline run" in ArticleResult.__doc__
