"""Filesystem access for Hexo post files."""

from __future__ import annotations

import re
import uuid
from pathlib import Path

from hexobot.agent.tools.hexo.frontmatter import read_document
from hexobot.agent.tools.hexo.models import Post


def slugify(text: str) -> str:
    """Turn a post title into a filename slug."""
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def validate_filename(filename: str) -> str:
    """Reject names that could escape the posts directory."""
    name = (filename or "").strip()
    if not name:
        raise ValueError("filename must not be empty")
    if ".." in name or "/" in name or "\\" in name:
        raise ValueError("Invalid filename: must not contain path separators")
    return name


class PostStorage:
    """Markdown posts under ``<blog>/source/_posts``."""

    def __init__(self, blog_dir: Path):
        self.blog_dir = blog_dir.resolve()
        self.posts_dir = self.blog_dir / "source" / "_posts"

    def path_for(self, filename: str) -> Path:
        return self.posts_dir / validate_filename(filename)

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def list_filenames(self) -> list[str]:
        """Sorted ``*.md`` names; a missing directory yields an empty list."""
        if not self.posts_dir.is_dir():
            return []
        return sorted(p.name for p in self.posts_dir.iterdir() if p.is_file() and p.name.endswith(".md"))

    def read_post(self, filename: str) -> Post:
        path = self.path_for(filename)
        raw = path.read_text(encoding="utf-8")
        doc = read_document(raw)
        return Post(filename=path.name, metadata=doc.metadata, body=doc.body, raw=doc.raw)

    def write_post(self, filename: str, content: str) -> Path:
        """Write a post atomically via a temp file in the same directory."""
        path = self.path_for(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".tmp-{uuid.uuid4()}")
        try:
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(path)
        finally:
            tmp_path.unlink(missing_ok=True)
        return path

    def delete_post(self, filename: str) -> None:
        path = self.path_for(filename)
        if not path.is_file():
            raise FileNotFoundError(f"Post not found: {path.name}")
        path.unlink()
