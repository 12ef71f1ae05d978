from __future__ import annotations

import asyncio

import httpx
import pytest

from ArticleGate.article_fetcher import FetchConfig, FetchError, fetch_html
from ArticleGate.models import FailureKind


def run_fetch(url: str, handler, config: FetchConfig | None = None) -> str:
    async def _go() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_html(url, config, client)

    return asyncio.run(_go())


def test_fetch_returns_body_and_sends_identity_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("user-agent")
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, text="<html>ok</html>")

    body = run_fetch("https://news.example/story", handler)

    assert body == "<html>ok</html>"
    assert "MirrorSource/1.0" in seen["ua"]
    assert seen["accept"] == "text/html,application/xhtml+xml"


@pytest.mark.parametrize("status", [401, 402, 403])
def test_access_denied_statuses_are_paywall(status: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="denied")

    with pytest.raises(FetchError) as exc:
        run_fetch("https://gated.example/story", handler)

    assert exc.value.kind is FailureKind.HTTP_ACCESS_DENIED
    assert exc.value.reason == f"HTTP {status} - likely paywall"
    assert "Failed to fetch https://gated.example/story" in str(exc.value)


@pytest.mark.parametrize("status", [404, 429, 500, 503])
def test_other_error_statuses_are_not_paywall(status: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="nope")

    with pytest.raises(FetchError) as exc:
        run_fetch("https://broken.example/story", handler)

    assert exc.value.kind is FailureKind.HTTP_ERROR
    assert exc.value.reason == f"HTTP {status}"


def test_fetch_makes_a_single_attempt():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("connection reset", request=request)

    with pytest.raises(FetchError) as exc:
        run_fetch("https://flaky.example/story", handler)

    assert calls["count"] == 1
    assert exc.value.kind is FailureKind.TRANSPORT
    assert exc.value.reason == "connection reset"
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_fetch_times_out_within_bound():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(30)
        return httpx.Response(200, text="too late")

    loop_time = {}

    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            start = asyncio.get_running_loop().time()
            try:
                await fetch_html("https://slow.example", FetchConfig(timeout=0.05), client)
            finally:
                loop_time["elapsed"] = asyncio.get_running_loop().time() - start

    with pytest.raises(FetchError) as exc:
        asyncio.run(_go())

    assert exc.value.kind is FailureKind.TRANSPORT
    assert exc.value.reason == "timeout after 0.05s"
    assert loop_time["elapsed"] < 5


def test_fetch_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://news.example/new"})
        return httpx.Response(200, text="<html>moved</html>")

    assert run_fetch("https://news.example/old", handler) == "<html>moved</html>"


def test_invalid_url_is_wrapped_as_transport_failure():
    handler_calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        handler_calls["count"] += 1
        return httpx.Response(200, text="<html>ok</html>")

    with pytest.raises(FetchError) as exc:
        run_fetch("http://[::1", handler)

    assert handler_calls["count"] == 0
    assert exc.value.kind is FailureKind.TRANSPORT
    assert isinstance(exc.value.__cause__, httpx.InvalidURL)
