"""Web search and fetch tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hexobot.agent.tools.base import Tool
from hexobot.agent.tools.web.fetch import FetchError, WebFetcher
from hexobot.agent.tools.websearch.client import WebSearchClient, WebSearchError

if TYPE_CHECKING:
    from hexobot.config.schema import WebFetchConfig, WebSearchConfig

MAX_SEARCH_RESULTS = 20


class WebSearchTool(Tool):
    """Search the web via DuckDuckGo. No API key required."""

    name = "web_search"
    description = "Search the web via DuckDuckGo. Returns titles, URLs, and snippets. No API key required."
    parameters = {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"},
            "count": {
                "type": "integer",
                "description": f"Maximum number of results (1-{MAX_SEARCH_RESULTS})",
                "minimum": 1,
                "maximum": MAX_SEARCH_RESULTS,
            },
        },
        "required": ["query"],
    }

    def __init__(
        self,
        web_search_config: WebSearchConfig | None = None,
        client: WebSearchClient | None = None,
    ):
        self._client = client or WebSearchClient(web_search_config)

    async def execute(self, query: str, count: int | None = None, **kwargs: Any) -> str:
        if count is None:
            count = self._client.config.max_results
        n = min(max(count, 1), MAX_SEARCH_RESULTS)
        try:
            results = await self._client.search(query=query, count=n)
        except WebSearchError as e:
            return f"Error: {e}"

        if not results:
            return f"No results for: {query}"

        return "\n\n".join(
            f"{i}. {item.title}\n   {item.url}\n   {item.snippet}"
            for i, item in enumerate(results, 1)
        )


class WebFetchTool(Tool):
    """Fetch a URL and convert its content to markdown."""

    name = "web_fetch"
    description = "Fetch a URL and convert its content to markdown. Useful for reading web pages."
    parameters = {
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "URL to fetch", "minLength": 1},
        },
        "required": ["url"],
    }

    def __init__(
        self,
        web_fetch_config: WebFetchConfig | None = None,
        fetcher: WebFetcher | None = None,
    ):
        self._fetcher = fetcher or WebFetcher(web_fetch_config)

    async def execute(self, url: str, **kwargs: Any) -> str:
        try:
            doc = await self._fetcher.fetch(url)
        except FetchError as e:
            return f"Error: {e}"

        header = f"# {doc.title}\n\n" if doc.title else ""
        meta = f"[Status: {doc.status_code}, Length: {doc.length}]\n\n"
        return header + meta + doc.content
