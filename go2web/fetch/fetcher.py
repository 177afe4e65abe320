"""Cache-aware page fetcher with manual redirect handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from loguru import logger

from go2web.config.schema import HttpConfig
from go2web.errors import FetchError, HttpStatusError, NetworkError, RedirectLoopError
from go2web.fetch.models import FetchResult

if TYPE_CHECKING:
    from go2web.cache.store import PageCache

REDIRECT_STATUS_CODES = frozenset({301, 302, 303})


def build_timeout(connect_timeout_ms: int, read_timeout_ms: int) -> httpx.Timeout:
    """Build an httpx timeout from millisecond connect/read limits."""
    connect = connect_timeout_ms / 1000
    read = read_timeout_ms / 1000
    return httpx.Timeout(read, connect=connect, read=read)


class Fetcher:
    """Fetch pages over HTTP, serving and filling the injected page cache.

    Redirects (301, 302, 303) are followed one hop at a time up to
    ``max_redirects``. The body is cached under the URL originally passed to
    :meth:`fetch`, not under the URL that finally answered.
    """

    def __init__(self, cache: PageCache, config: HttpConfig | None = None):
        self.cache = cache
        self.config = config or HttpConfig()

    async def fetch(self, url: str) -> FetchResult:
        cached = self.cache.get(url)
        if cached is not None:
            logger.info("Cache hit for URL: {}", url)
            return FetchResult(url=url, body=cached, final_url=url, from_cache=True)

        timeout = build_timeout(self.config.connect_timeout_ms, self.config.read_timeout_ms)
        redirects: list[str] = []
        current = url

        async with httpx.AsyncClient(timeout=timeout, follow_redirects=False) as client:
            while True:
                response = await self._get(client, current)
                status = response.status_code

                if status in REDIRECT_STATUS_CODES:
                    target = self._redirect_target(response, current)
                    if len(redirects) >= self.config.max_redirects:
                        raise RedirectLoopError(
                            f"too many redirects (limit {self.config.max_redirects}) "
                            f"starting at {url}",
                            url=url,
                        )
                    logger.info("Redirecting to: {}", target)
                    redirects.append(target)
                    current = target

                    cached = self.cache.get(current)
                    if cached is not None:
                        logger.info("Cache hit for URL: {}", current)
                        self.cache.put(url, cached)
                        return FetchResult(
                            url=url,
                            body=cached,
                            final_url=current,
                            from_cache=True,
                            redirects=redirects,
                        )
                    continue

                if status >= 400:
                    reason = response.reason_phrase or "error"
                    raise HttpStatusError(
                        f"HTTP {status} {reason} for {current}",
                        url=current,
                        status_code=status,
                    )

                body = response.content.decode("utf-8", errors="replace")
                self.cache.put(url, body)
                return FetchResult(
                    url=url,
                    body=body,
                    final_url=current,
                    redirects=redirects,
                    status_code=status,
                )

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        try:
            response = await client.get(url)
        except httpx.InvalidURL as e:
            raise NetworkError(f"invalid URL {url!r}: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"{type(e).__name__}: {e}", url=url) from e
        logger.debug("GET {} -> {}", url, response.status_code)
        return response

    @staticmethod
    def _redirect_target(response: httpx.Response, current: str) -> str:
        location = response.headers.get("Location")
        if not location:
            raise FetchError(
                f"redirect {response.status_code} from {current} has no Location header",
                url=current,
            )
        return str(httpx.URL(current).join(location))
