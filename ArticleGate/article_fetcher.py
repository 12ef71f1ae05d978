"""Single-shot HTML fetch with status-code classification."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict

import httpx

from .config import ACCESS_DENIED_STATUSES, DEFAULT_HEADERS, HTTP_TIMEOUT
from .models import ArticleFailure, FailureKind

logger = logging.getLogger(__name__)


class FetchError(ArticleFailure):
    """Raised when the fetcher cannot return HTML for a URL."""

    def __init__(
        self,
        url: str,
        kind: FailureKind,
        reason: str,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(kind, reason)
        self.url = url
        self.args = (f"Failed to fetch {url}: {reason}",)
        self.__cause__ = cause


@dataclass(frozen=True)
class FetchConfig:
    timeout: float = HTTP_TIMEOUT
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


async def fetch_html(
    url: str,
    config: FetchConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Return the body of a 2xx response for *url*.

    One attempt, no retries. The whole request, body included, must finish
    within ``config.timeout`` seconds or it is cancelled. Pass *client* to
    reuse a connection pool; otherwise a client is opened for this call.
    """
    cfg = config or FetchConfig()
    start = perf_counter()

    try:
        async with asyncio.timeout(cfg.timeout):
            response = await _get(url, cfg, client)
    except TimeoutError as exc:
        raise FetchError(url, FailureKind.TRANSPORT, f"timeout after {cfg.timeout}s", cause=exc) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        reason = str(exc) or type(exc).__name__
        raise FetchError(url, FailureKind.TRANSPORT, reason, cause=exc) from exc

    elapsed = perf_counter() - start
    status = response.status_code
    logger.debug("[fetch][status=%d][duration=%.2fs] %s", status, elapsed, url)

    if status in ACCESS_DENIED_STATUSES:
        raise FetchError(url, FailureKind.HTTP_ACCESS_DENIED, f"HTTP {status} - likely paywall")

    if not response.is_success:
        raise FetchError(url, FailureKind.HTTP_ERROR, f"HTTP {status}")

    return response.text


async def _get(url: str, cfg: FetchConfig, client: httpx.AsyncClient | None) -> httpx.Response:
    if client is not None:
        return await client.get(url, headers=cfg.headers, timeout=cfg.timeout, follow_redirects=True)

    async with httpx.AsyncClient(follow_redirects=True) as owned:
        return await owned.get(url, headers=cfg.headers, timeout=cfg.timeout)


__all__ = [
    "FetchConfig",
    "FetchError",
    "fetch_html",
]
