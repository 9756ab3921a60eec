"""Regex-based HTML to Markdown conversion.

The conversion is an ordered list of text rewrites, not a DOM walk. Each
pass assumes the markup left behind by the previous ones, so the order of
``_REWRITES`` is significant. Unbalanced or overlapping tags produce imperfect
output but never an exception.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hexobot.utils.entities import decode_entities

_FLAGS = re.IGNORECASE | re.DOTALL

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", _FLAGS)

_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Non-content subtrees and comments
    (re.compile(r"<(script|style|nav|footer|header|aside|iframe|noscript)[^>]*>.*?</\1>", _FLAGS), ""),
    (re.compile(r"<!--.*?-->", re.DOTALL), ""),
    # Headings
    (re.compile(r"<h1[^>]*>(.*?)</h1>", _FLAGS), r"\n\n# \1\n\n"),
    (re.compile(r"<h2[^>]*>(.*?)</h2>", _FLAGS), r"\n\n## \1\n\n"),
    (re.compile(r"<h3[^>]*>(.*?)</h3>", _FLAGS), r"\n\n### \1\n\n"),
    (re.compile(r"<h[4-6][^>]*>(.*?)</h[4-6]>", _FLAGS), r"\n\n#### \1\n\n"),
    # Links, list items, block breaks
    (re.compile(r'<a\s[^>]*href="([^"]*)"[^>]*>(.*?)</a>', _FLAGS), r"[\2](\1)"),
    (re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", _FLAGS), r"- \1\n"),
    (re.compile(r"</(p|div)>", re.IGNORECASE), "\n\n"),
    (re.compile(r"<br\s*/?>", re.IGNORECASE), "\n"),
    # Inline formatting and code
    (re.compile(r"<(strong|b)(?:\s[^>]*)?>(.*?)</\1>", _FLAGS), r"**\2**"),
    (re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</\1>", _FLAGS), r"_\2_"),
    (re.compile(r"<code[^>]*>(.*?)</code>", _FLAGS), r"`\1`"),
    (re.compile(r"<pre[^>]*>(.*?)</pre>", _FLAGS), "\n```\n\\1\n```\n"),
    # Whatever markup is left
    (re.compile(r"<[^>]+>"), ""),
)

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")


@dataclass(slots=True, frozen=True)
class MarkdownPage:
    """Converted page content and its document title."""

    content: str
    title: str = ""


def extract_title(html: str) -> str:
    match = _TITLE_RE.search(html)
    if not match:
        return ""
    return decode_entities(match.group(1).strip())


def normalize_whitespace(text: str) -> str:
    """Collapse blank-line runs and horizontal whitespace, trim every line."""
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return text.strip()


def html_to_markdown(html: str) -> MarkdownPage:
    """Convert raw HTML into Markdown text plus the page title."""
    title = extract_title(html)

    text = html
    for pattern, replacement in _REWRITES:
        text = pattern.sub(replacement, text)

    text = decode_entities(text)
    return MarkdownPage(content=normalize_whitespace(text), title=title)
