"""DuckDuckGo HTML endpoint adapter.

The HTML endpoint needs no API key. Results are scraped from its markup:
links carry ``class="result__a"`` and snippets ``class="result__snippet"``.
Links and snippets are paired by position, which assumes both appear in the
same per-result order. If the page markup changes, extraction degrades to
fewer (or no) results rather than failing.
"""

import re

import httpx

from hexobot.agent.tools.websearch.models import SearchResult
from hexobot.utils.entities import strip_html

_LINK_RE = re.compile(r'<a\s[^>]*class="result__a"[^>]*>(.*?)</a>', re.IGNORECASE | re.DOTALL)
_SNIPPET_RE = re.compile(r'<a\s[^>]*class="result__snippet"[^>]*>(.*?)</a>', re.IGNORECASE | re.DOTALL)
_HREF_RE = re.compile(r'href="([^"]*)"', re.IGNORECASE)


def parse_results_html(html: str, max_results: int) -> list[SearchResult]:
    """Extract up to ``max_results`` title/url/snippet triples from a results page."""
    links: list[tuple[str, str]] = []
    for match in _LINK_RE.finditer(html):
        href = _HREF_RE.search(match.group(0))
        url = href.group(1).strip() if href else ""
        title = strip_html(match.group(1)).strip()
        if url and title:
            links.append((url, title))

    snippets = [strip_html(m.group(1)).strip() for m in _SNIPPET_RE.finditer(html)]

    results: list[SearchResult] = []
    for i, (url, title) in enumerate(links[: max(0, max_results)]):
        results.append(
            SearchResult(
                title=title,
                url=url,
                snippet=snippets[i] if i < len(snippets) else "",
            )
        )
    return results


async def search_duckduckgo(
    *,
    query: str,
    max_results: int,
    endpoint: str,
    user_agent: str,
    timeout: float,
) -> list[SearchResult]:
    """Search with the DuckDuckGo HTML endpoint and normalize results."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            endpoint,
            data={"q": query},
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "User-Agent": user_agent,
            },
            timeout=timeout,
        )
        response.raise_for_status()

    return parse_results_html(response.text, max_results)
