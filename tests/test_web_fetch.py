import asyncio

import httpx
import pytest

from hexobot.agent.tools.web import WebFetchTool
from hexobot.agent.tools.web.fetch import (
    FetchTimeoutError,
    HttpStatusError,
    ResponseTooLargeError,
    TooManyRedirectsError,
    UnsafeUrlError,
    WebFetcher,
    render_body,
)
from hexobot.agent.tools.web.safety import fetch_url_block_reason
from hexobot.config.schema import WebFetchConfig


class TrackingStream(httpx.AsyncByteStream):
    """Body stream that records whether it was read."""

    def __init__(self, chunks: list[bytes]):
        self._chunks = chunks
        self.read = False

    async def __aiter__(self):
        self.read = True
        for chunk in self._chunks:
            yield chunk


def _fetcher(handler, **config) -> WebFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebFetcher(WebFetchConfig(**config), client=client)


@pytest.mark.asyncio
async def test_fetch_html_is_converted_to_markdown() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Accept"].startswith("text/html")
        return httpx.Response(
            200,
            headers={"content-type": "text/html; charset=utf-8"},
            text="<html><title>Page</title><body><h1>Hi</h1><p>Text</p></body></html>",
        )

    doc = await _fetcher(handler).fetch("https://example.com/page")

    assert doc.title == "Page"
    assert doc.content == "Page\n\n# Hi\n\nText"
    assert doc.status_code == 200
    assert doc.final_url == "https://example.com/page"
    assert doc.length == len(doc.content)


@pytest.mark.asyncio
async def test_fetch_follows_relative_redirects() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if request.url.path == "/start":
            return httpx.Response(301, headers={"location": "/docs/next"})
        if request.url.path == "/docs/next":
            return httpx.Response(302, headers={"location": "final"})
        return httpx.Response(200, headers={"content-type": "text/plain"}, text="done")

    doc = await _fetcher(handler).fetch("https://example.com/start")

    assert seen == [
        "https://example.com/start",
        "https://example.com/docs/next",
        "https://example.com/docs/final",
    ]
    assert doc.final_url == "https://example.com/docs/final"
    assert doc.content == "done"


@pytest.mark.asyncio
async def test_fetch_fails_after_redirect_cap() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return httpx.Response(302, headers={"location": f"/hop{len(calls)}"})

    with pytest.raises(TooManyRedirectsError, match="max 3"):
        await _fetcher(handler, max_redirects=3).fetch("https://example.com/")

    assert len(calls) == 4


@pytest.mark.asyncio
async def test_declared_length_over_cap_fails_before_body_is_read() -> None:
    stream = TrackingStream([b"tiny"])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"content-type": "text/plain", "content-length": str(5 * 1024 * 1024)},
            stream=stream,
        )

    with pytest.raises(ResponseTooLargeError, match="5.0MB"):
        await _fetcher(handler).fetch("https://example.com/big")

    assert stream.read is False


@pytest.mark.asyncio
async def test_actual_size_over_cap_fails_after_reading() -> None:
    stream = TrackingStream([b"a" * 600, b"b" * 600])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "text/plain"}, stream=stream)

    with pytest.raises(ResponseTooLargeError, match="after download"):
        await _fetcher(handler, max_bytes=1000).fetch("https://example.com/liar")

    assert stream.read is True


@pytest.mark.asyncio
async def test_non_2xx_status_carries_code_and_reason() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    with pytest.raises(HttpStatusError) as excinfo:
        await _fetcher(handler).fetch("https://example.com/missing")

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "HTTP 404: Not Found"


@pytest.mark.asyncio
async def test_redirect_without_location_is_a_status_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302)

    with pytest.raises(HttpStatusError):
        await _fetcher(handler).fetch("https://example.com/")


@pytest.mark.asyncio
async def test_fetch_timeout_abandons_request() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, text="late")

    with pytest.raises(FetchTimeoutError, match="timed out"):
        await _fetcher(handler, timeout=0.05).fetch("https://example.com/slow")


@pytest.mark.asyncio
async def test_private_hosts_and_redirect_targets_are_blocked() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"location": "http://127.0.0.1/admin"})

    with pytest.raises(UnsafeUrlError, match="Private/local host blocked"):
        await _fetcher(handler).fetch("https://example.com/")

    with pytest.raises(UnsafeUrlError, match="Only http/https"):
        await _fetcher(handler).fetch("file:///etc/passwd")


def test_fetch_url_block_reason() -> None:
    assert fetch_url_block_reason("https://example.com", allow_private_network=False) is None
    assert fetch_url_block_reason("http://localhost:8000", allow_private_network=True) is None
    assert "Private/local" in fetch_url_block_reason("http://10.0.0.5", allow_private_network=False)
    assert fetch_url_block_reason("https://", allow_private_network=False) == "URL host is required"


def test_render_body_dispatches_on_content_type() -> None:
    assert render_body('{"a": [1, 2]}', "application/json") == ('{\n  "a": [\n    1,\n    2\n  ]\n}', "")
    assert render_body("{not json", "application/json; charset=utf-8") == ("{not json", "")
    assert render_body("<b>raw</b>", "text/plain") == ("<b>raw</b>", "")
    assert render_body("<title>T</title><p>x</p>", "application/xhtml+xml") == ("Tx", "T")


@pytest.mark.asyncio
async def test_web_fetch_tool_formats_output_and_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/gone":
            return httpx.Response(410)
        return httpx.Response(200, headers={"content-type": "text/html"}, text="<title>T</title><p>Body</p>")

    tool = WebFetchTool(fetcher=_fetcher(handler))

    ok = await tool.execute(url="https://example.com/")
    assert ok == "# T\n\n[Status: 200, Length: 5]\n\nTBody"

    failed = await tool.execute(url="https://example.com/gone")
    assert failed == "Error: HTTP 410: Gone"
