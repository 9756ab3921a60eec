"""Web search package."""

from hexobot.agent.tools.websearch.client import WebSearchClient, WebSearchError
from hexobot.agent.tools.websearch.duckduckgo import parse_results_html
from hexobot.agent.tools.websearch.models import SearchResult

__all__ = ["SearchResult", "WebSearchClient", "WebSearchError", "parse_results_html"]
