"""Single-URL retrieval with redirect, size and timeout limits."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
from loguru import logger

from hexobot.agent.tools.web.markdown import html_to_markdown
from hexobot.agent.tools.web.safety import fetch_url_block_reason

if TYPE_CHECKING:
    from hexobot.config.schema import WebFetchConfig

ACCEPT_HEADER = "text/html,application/xhtml+xml,text/plain,application/json"


class FetchError(Exception):
    """Raised when a URL cannot be retrieved."""


class UnsafeUrlError(FetchError):
    """URL scheme or host is not allowed."""


class TooManyRedirectsError(FetchError):
    """Redirect chain exceeded the hop limit."""


class ResponseTooLargeError(FetchError):
    """Declared or actual body size exceeded the byte limit."""


class FetchTimeoutError(FetchError):
    """The whole fetch did not finish within the timeout."""


class HttpStatusError(FetchError):
    """Final response had a non-2xx status."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"HTTP {status_code}: {reason}")
        self.status_code = status_code
        self.reason = reason


@dataclass(slots=True, frozen=True)
class FetchedDocument:
    """Converted body of a fetched URL."""

    content: str
    title: str
    status_code: int
    final_url: str
    length: int


def _megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.1f}MB"


def render_body(text: str, content_type: str) -> tuple[str, str]:
    """Convert a response body by content type. Returns (content, title)."""
    kind = content_type.lower()
    if "text/html" in kind or "application/xhtml" in kind:
        page = html_to_markdown(text)
        return page.content, page.title
    if "application/json" in kind:
        try:
            return json.dumps(json.loads(text), indent=2, ensure_ascii=False), ""
        except ValueError:
            return text, ""
    return text, ""


class WebFetcher:
    """Fetch one URL over httpx, following redirects by hand.

    The transport is an ``httpx.AsyncClient``; pass one in to share a
    connection pool (or a mock transport in tests), otherwise a client is
    created per call.
    """

    def __init__(
        self,
        config: WebFetchConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        from hexobot.config.schema import WebFetchConfig

        self.config = config or WebFetchConfig()
        self._client = client

    async def fetch(self, url: str) -> FetchedDocument:
        """Fetch ``url`` and return its converted content."""
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            raise FetchTimeoutError(f"Request timed out after {self.config.timeout:g} seconds") from None
        except httpx.HTTPError as e:
            raise FetchError(f"Request failed: {e}") from e

    async def _fetch(self, url: str) -> FetchedDocument:
        if self._client is not None:
            return await self._follow(self._client, url)
        async with httpx.AsyncClient(follow_redirects=False, timeout=self.config.timeout) as client:
            return await self._follow(client, url)

    async def _follow(self, client: httpx.AsyncClient, url: str) -> FetchedDocument:
        current_url = url
        for _ in range(self.config.max_redirects + 1):
            self._check_url(current_url)
            request = client.build_request(
                "GET",
                current_url,
                headers={"User-Agent": self.config.user_agent, "Accept": ACCEPT_HEADER},
            )
            response = await client.send(request, stream=True, follow_redirects=False)
            try:
                location = response.headers.get("location")
                if 300 <= response.status_code < 400 and location:
                    next_url = urljoin(current_url, location)
                    logger.debug("Redirect {} -> {}", current_url, next_url)
                    current_url = next_url
                    continue
                return await self._read(response, current_url)
            finally:
                await response.aclose()

        raise TooManyRedirectsError(f"Too many redirects (max {self.config.max_redirects})")

    async def _read(self, response: httpx.Response, final_url: str) -> FetchedDocument:
        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, response.reason_phrase)

        max_bytes = self.config.max_bytes
        declared = self._declared_length(response)
        if declared > max_bytes:
            raise ResponseTooLargeError(
                f"Response too large: {_megabytes(declared)} (max {_megabytes(max_bytes)})"
            )

        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > max_bytes:
                raise ResponseTooLargeError(
                    f"Response too large after download (max {max_bytes} bytes)"
                )

        text = bytes(body).decode("utf-8", errors="replace")
        content, title = render_body(text, response.headers.get("content-type", ""))
        logger.info("Fetched {} ({} status, {} bytes)", final_url, response.status_code, len(body))
        return FetchedDocument(
            content=content,
            title=title,
            status_code=response.status_code,
            final_url=final_url,
            length=len(content),
        )

    def _check_url(self, url: str) -> None:
        reason = fetch_url_block_reason(url, allow_private_network=self.config.allow_private_network)
        if reason:
            raise UnsafeUrlError(reason)

    @staticmethod
    def _declared_length(response: httpx.Response) -> int:
        try:
            return int(response.headers.get("content-length") or 0)
        except ValueError:
            return 0
