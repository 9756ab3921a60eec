"""Web search client backed by the DuckDuckGo HTML endpoint."""

from typing import TYPE_CHECKING

from loguru import logger

from hexobot.agent.tools.websearch.duckduckgo import search_duckduckgo
from hexobot.agent.tools.websearch.models import SearchResult

if TYPE_CHECKING:
    from hexobot.config.schema import WebSearchConfig


class WebSearchError(Exception):
    """Raised when a search request cannot be made or fails."""


class WebSearchClient:
    """Search dispatcher with configured endpoint and limits."""

    def __init__(self, config: "WebSearchConfig | None" = None):
        from hexobot.config.schema import WebSearchConfig

        self.config = config or WebSearchConfig()

    async def search(self, *, query: str, count: int | None = None) -> list[SearchResult]:
        """Search the web and return at most ``count`` results."""
        text = (query or "").strip()
        if not text:
            raise WebSearchError("empty search query")

        max_results = count if count is not None else self.config.max_results
        try:
            results = await search_duckduckgo(
                query=text,
                max_results=max_results,
                endpoint=self.config.endpoint,
                user_agent=self.config.user_agent,
                timeout=self.config.timeout,
            )
        except Exception as e:
            raise WebSearchError(f"duckduckgo search failed: {e}") from e

        logger.debug("Search for {!r} returned {} result(s)", text, len(results))
        return results
