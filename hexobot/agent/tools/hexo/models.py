"""Models for Hexo posts and their front matter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FIXED_FIELDS = ("title", "date", "tags", "categories")


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_coerce_str(item) for item in value)
    return str(value)


def _coerce_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_coerce_str(item) for item in value]


@dataclass(slots=True)
class PostMetadata:
    """Front matter of a post.

    ``title``/``date`` are free-form strings and ``tags``/``categories`` are
    always lists. Any other key lives in ``extra`` in first-seen order and
    holds a string, a boolean or a list of strings.
    """

    title: str = ""
    date: str = ""
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PostMetadata":
        """Build metadata from a parsed front-matter mapping."""
        return cls(
            title=_coerce_str(data.get("title")),
            date=_coerce_str(data.get("date")),
            tags=_coerce_str_list(data.get("tags")),
            categories=_coerce_str_list(data.get("categories")),
            extra={k: v for k, v in data.items() if k not in FIXED_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Ordered mapping: fixed fields first, then extra fields."""
        data: dict[str, Any] = {
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "categories": list(self.categories),
        }
        for key, value in self.extra.items():
            if key not in FIXED_FIELDS:
                data[key] = list(value) if isinstance(value, list) else value
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.to_dict().get(key, default)


@dataclass(slots=True, frozen=True)
class ParsedDocument:
    """A markdown document split into metadata and body.

    ``raw`` is the unmodified input. ``body`` is the text after the metadata
    block, or all of ``raw`` when there is no block.
    """

    metadata: PostMetadata
    body: str
    raw: str


@dataclass(slots=True, frozen=True)
class Post:
    """A parsed document read from ``source/_posts``."""

    filename: str
    metadata: PostMetadata
    body: str
    raw: str

    def summary(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "title": self.metadata.title,
            "date": self.metadata.date,
            "tags": list(self.metadata.tags),
            "categories": list(self.metadata.categories),
        }
