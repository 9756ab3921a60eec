"""HTML entity decoding and inline tag stripping."""

from __future__ import annotations

import re

# Plain-text renditions; characters outside this table decode to themselves.
_NAMED_ENTITIES: dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "nbsp": " ",
    "mdash": "---",
    "ndash": "--",
    "hellip": "...",
    "copy": "(c)",
    "reg": "(R)",
}

_CODEPOINT_RENDITIONS: dict[int, str] = {
    160: " ",
    169: "(c)",
    174: "(R)",
    8211: "--",
    8212: "---",
    8230: "...",
}

_BASIC_ENTITIES: dict[str, str] = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
}

_ENTITY_RE = re.compile(r"&(?:#(\d+)|#[xX]([0-9a-fA-F]+)|([a-zA-Z]+));")
_BASIC_ENTITY_RE = re.compile("|".join(re.escape(k) for k in _BASIC_ENTITIES))
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def _replace_entity(match: re.Match[str]) -> str:
    decimal, hexadecimal, name = match.groups()
    if name is not None:
        return _NAMED_ENTITIES.get(name, match.group(0))

    try:
        codepoint = int(decimal) if decimal is not None else int(hexadecimal, 16)
        if codepoint in _CODEPOINT_RENDITIONS:
            return _CODEPOINT_RENDITIONS[codepoint]
        return chr(codepoint)
    except (ValueError, OverflowError):
        # too many digits for int() or outside the unicode range
        return match.group(0)


def decode_entities(text: str) -> str:
    """Replace known named and numeric character references in a single pass.

    Unknown named entities are left as they are.
    """
    return _ENTITY_RE.sub(_replace_entity, text)


def strip_html(fragment: str) -> str:
    """Drop tags, decode the basic entity set and collapse whitespace runs."""
    text = _TAG_RE.sub("", fragment)
    text = _BASIC_ENTITY_RE.sub(lambda m: _BASIC_ENTITIES[m.group(0)], text)
    return _WHITESPACE_RE.sub(" ", text)
