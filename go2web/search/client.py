"""Search-engine client that scrapes result URLs from the HTML results page."""

from __future__ import annotations

import httpx
from loguru import logger

from go2web.config.schema import SearchConfig
from go2web.errors import SearchError
from go2web.extract.patterns import extract_search_result_urls
from go2web.fetch.fetcher import build_timeout


class SearchClient:
    """Run live searches. Results are never cached."""

    def __init__(self, config: SearchConfig | None = None):
        self.config = config or SearchConfig()

    async def search_urls(self, term: str) -> list[str]:
        """Search for ``term`` and return up to ``max_results`` result URLs."""
        timeout = build_timeout(self.config.connect_timeout_ms, self.config.read_timeout_ms)
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=False) as client:
                response = await client.get(
                    self.config.endpoint,
                    params={"q": term},
                    headers={"User-Agent": self.config.user_agent},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SearchError(f"{type(e).__name__}: {e}") from e

        logger.debug("GET {} -> {}", self.config.endpoint, response.status_code)
        if response.status_code >= 400:
            raise SearchError(
                f"HTTP {response.status_code} {response.reason_phrase or 'error'} "
                f"from {self.config.endpoint}"
            )

        body = response.content.decode("utf-8", errors="replace")
        return extract_search_result_urls(body, limit=self.config.max_results)

    async def search(self, term: str) -> str:
        """Search for ``term`` and return the result URLs one per line.

        Failures are logged and produce an empty string.
        """
        try:
            urls = await self.search_urls(term)
        except SearchError as e:
            logger.error("Error performing search: {}", e)
            return ""
        return "\n".join(urls)
