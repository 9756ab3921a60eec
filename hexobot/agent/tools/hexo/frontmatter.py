"""Front matter parsing and rendering for Hexo posts.

Only a small subset of YAML is understood: ``key: value`` scalars,
``true``/``false`` booleans and dash lists indented by two or four spaces.
Nested mappings, multi-line scalars and inline ``[a, b]`` arrays cannot be
represented, and a ``---`` inside a value is not escaped. Lines outside that
subset are skipped.

Some values do not survive a render then parse:

- an empty string comes back as an empty list (``key:`` opens a list);
- the strings ``"true"``/``"false"`` come back as booleans;
- one leading and one trailing quote character are stripped from values;
- an empty list item renders as a bare ``  -`` line, which ends the list on
  parse, so it and every later item are lost.
"""

from __future__ import annotations

import re
from typing import Any

from hexobot.agent.tools.hexo.models import FIXED_FIELDS, ParsedDocument, PostMetadata

FRONT_MATTER_MARKER = "---"

_BLOCK_RE = re.compile(r"^---\r?\n(.*?)\r?\n---\r?\n(.*)$", re.DOTALL)
_KEY_VALUE_RE = re.compile(r"^(\w[\w-]*):\s*(.*)$")
_LIST_ITEM_PREFIXES = ("  - ", "    - ")
_LIST_DASH_RE = re.compile(r"^\s*-\s*")
_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def _unquote(value: str) -> str:
    return _QUOTES_RE.sub("", value)


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split text into a raw metadata mapping and the body.

    Text without a leading ``---`` block yields an empty mapping and the
    whole text as body.
    """
    match = _BLOCK_RE.match(text)
    if not match:
        return {}, text

    block, body = match.group(1), match.group(2)
    meta: dict[str, Any] = {}
    current_key = ""
    current_list: list[str] | None = None

    for line in block.split("\n"):
        line = line.rstrip()

        if line.startswith(_LIST_ITEM_PREFIXES):
            if current_list is not None:
                current_list.append(_unquote(_LIST_DASH_RE.sub("", line)))
            continue

        if current_list is not None:
            meta[current_key] = current_list
            current_list = None

        kv = _KEY_VALUE_RE.match(line)
        if not kv:
            continue

        current_key, value = kv.group(1), kv.group(2).strip()
        if value in ("", "[]"):
            current_list = []
        elif value == "true":
            meta[current_key] = True
        elif value == "false":
            meta[current_key] = False
        else:
            meta[current_key] = _unquote(value)

    if current_list is not None:
        meta[current_key] = current_list

    return meta, body


def read_document(raw: str) -> ParsedDocument:
    """Parse a post into typed metadata, body and the original text."""
    meta, body = parse_front_matter(raw)
    return ParsedDocument(metadata=PostMetadata.from_dict(meta), body=body, raw=raw)


def _render_field(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [f"{key}:", *(f"  - {item}" for item in value)]
    if isinstance(value, bool):
        return [f"{key}: {'true' if value else 'false'}"]
    return [f"{key}: {value}"]


def build_front_matter(meta: PostMetadata) -> str:
    """Render metadata as a ``---`` delimited block (no trailing newline)."""
    lines = [FRONT_MATTER_MARKER, f"title: {meta.title}", f"date: {meta.date}"]

    if meta.tags:
        lines.extend(_render_field("tags", meta.tags))
    if meta.categories:
        lines.extend(_render_field("categories", meta.categories))

    for key, value in meta.extra.items():
        if key in FIXED_FIELDS:
            continue
        lines.extend(_render_field(key, value))

    lines.append(FRONT_MATTER_MARKER)
    return "\n".join(lines)


def render_post(meta: PostMetadata, body: str) -> str:
    """Render a new post file."""
    return f"{build_front_matter(meta)}\n\n{body}\n"


def render_updated_post(meta: PostMetadata, body: str) -> str:
    """Render an existing post after an update, keeping the body as given."""
    separator = "" if body.startswith("\n") else "\n"
    return f"{build_front_matter(meta)}\n{separator}{body}"
