"""Web retrieval tools."""

from hexobot.agent.tools.web.fetch import FetchedDocument, FetchError, WebFetcher
from hexobot.agent.tools.web.markdown import MarkdownPage, html_to_markdown
from hexobot.agent.tools.web.tool import WebFetchTool, WebSearchTool

__all__ = [
    "FetchError",
    "FetchedDocument",
    "MarkdownPage",
    "WebFetchTool",
    "WebFetcher",
    "WebSearchTool",
    "html_to_markdown",
]
