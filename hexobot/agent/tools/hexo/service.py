"""Business logic for Hexo tool actions."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from hexobot.agent.tools.hexo.frontmatter import render_post, render_updated_post
from hexobot.agent.tools.hexo.models import PostMetadata
from hexobot.agent.tools.hexo.runner import CommandRunner, split_command
from hexobot.agent.tools.hexo.storage import PostStorage, slugify

if TYPE_CHECKING:
    from hexobot.config.schema import HexoToolConfig

ACTIONS = (
    "list_posts",
    "read_post",
    "create_post",
    "update_post",
    "delete_post",
    "list_tags",
    "generate",
    "deploy",
)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100
DEFAULT_DEPLOY_COMMAND = "npx hexo deploy"


def now_post_date() -> str:
    """Current UTC time in Hexo's ``YYYY-MM-DD HH:MM:SS`` form."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


class HexoService:
    """Post management and build commands for one Hexo project."""

    def __init__(
        self,
        hexo_config: HexoToolConfig | None = None,
        runner: CommandRunner | None = None,
    ):
        from hexobot.config.schema import HexoToolConfig

        self.config = hexo_config or HexoToolConfig()
        blog_dir = Path(self.config.dir or os.getcwd()).expanduser()
        self.storage = PostStorage(blog_dir)
        self.runner = runner or CommandRunner(self.storage.blog_dir)

    async def handle(self, action: str, **kwargs: Any) -> dict[str, Any]:
        """Dispatch action and return a structured payload."""
        action_name = (action or "").strip().lower()
        handlers: dict[str, Any] = {
            "list_posts": self._action_list_posts,
            "read_post": self._action_read_post,
            "create_post": self._action_create_post,
            "update_post": self._action_update_post,
            "delete_post": self._action_delete_post,
            "list_tags": self._action_list_tags,
            "generate": self._action_generate,
            "deploy": self._action_deploy,
        }

        if action_name not in handlers:
            return self._error(action_name, f"Unsupported action: {action_name}")

        try:
            return await handlers[action_name](**kwargs)
        except Exception as e:
            return self._error(action_name, str(e))

    async def _action_list_posts(
        self,
        tag: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        max_posts = limit if limit is not None else DEFAULT_LIST_LIMIT
        if max_posts < 1 or max_posts > MAX_LIST_LIMIT:
            raise ValueError(f"limit must be in range 1..{MAX_LIST_LIMIT}")

        filenames = self.storage.list_filenames()
        posts: list[dict[str, Any]] = []
        errors: list[str] = []
        tag_needle = (tag or "").lower()
        category_needle = (category or "").lower()

        for filename in filenames:
            if len(posts) >= max_posts:
                break
            try:
                post = self.storage.read_post(filename)
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping unreadable post {}: {}", filename, e)
                errors.append(f"{filename}: parse error")
                continue

            meta = post.metadata
            if tag_needle and not any(tag_needle in t.lower() for t in meta.tags):
                continue
            if category_needle and not any(category_needle in c.lower() for c in meta.categories):
                continue
            posts.append(post.summary())

        if not posts:
            summary = "No posts found."
        else:
            summary = f"Posts ({len(posts)}/{len(filenames)})"
        return self._success("list_posts", summary, posts=posts, total_files=len(filenames), errors=errors)

    async def _action_read_post(self, filename: str | None = None, **kwargs: Any) -> dict[str, Any]:
        post = self.storage.read_post(self._require(filename, "filename"))
        return self._success(
            "read_post",
            f"Read {post.filename}.",
            post=post.summary(),
            content=post.raw,
        )

    async def _action_create_post(
        self,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
        categories: list[str] | None = None,
        slug: str | None = None,
        date: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        clean_title = self._require(title, "title")
        post_slug = (slug or "").strip() or slugify(clean_title)
        if not post_slug:
            raise ValueError("slug is empty; pass a slug explicitly")
        filename = f"{post_slug}.md"

        if self.storage.exists(filename):
            raise FileExistsError(f"Post already exists: {filename}. Use update_post to modify it.")

        meta = PostMetadata(
            title=clean_title,
            date=date or now_post_date(),
            tags=list(tags or []),
            categories=list(categories or []),
        )
        self.storage.write_post(filename, render_post(meta, content or ""))
        logger.info("Created post {}", filename)

        return self._success(
            "create_post",
            f"Post created: source/_posts/{filename}",
            post={"filename": filename, **meta.to_dict()},
        )

    async def _action_update_post(
        self,
        filename: str | None = None,
        content: str | None = None,
        title: str | None = None,
        tags: list[str] | None = None,
        categories: list[str] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        post = self.storage.read_post(self._require(filename, "filename"))
        meta = replace(
            post.metadata,
            title=title if title is not None else post.metadata.title,
            tags=list(tags) if tags is not None else post.metadata.tags,
            categories=list(categories) if categories is not None else post.metadata.categories,
        )
        body = content if content is not None else post.body
        self.storage.write_post(post.filename, render_updated_post(meta, body))

        changes = [
            name
            for name, value in (
                ("title", title),
                ("content", content),
                ("tags", tags),
                ("categories", categories),
            )
            if value is not None
        ]
        logger.info("Updated post {} ({})", post.filename, ", ".join(changes) or "no changes")
        return self._success(
            "update_post",
            f"Post updated: {post.filename}",
            post={"filename": post.filename, **meta.to_dict()},
            changes=changes,
        )

    async def _action_delete_post(self, filename: str | None = None, **kwargs: Any) -> dict[str, Any]:
        name = self._require(filename, "filename")
        self.storage.delete_post(name)
        logger.info("Deleted post {}", name)
        return self._success("delete_post", f"Post deleted: {name}")

    async def _action_list_tags(self, **kwargs: Any) -> dict[str, Any]:
        tag_counts: Counter[str] = Counter()
        category_counts: Counter[str] = Counter()

        for filename in self.storage.list_filenames():
            try:
                post = self.storage.read_post(filename)
            except (OSError, UnicodeDecodeError):
                continue
            tag_counts.update(post.metadata.tags)
            category_counts.update(post.metadata.categories)

        return self._success(
            "list_tags",
            f"Tags ({len(tag_counts)}), Categories ({len(category_counts)})",
            tags=dict(tag_counts.most_common()),
            categories=dict(category_counts.most_common()),
        )

    async def _action_generate(self, **kwargs: Any) -> dict[str, Any]:
        result = await self.runner.run(
            split_command("npx hexo generate"),
            timeout=self.config.generate_timeout,
        )
        return self._success(
            "generate",
            "Hexo generate completed.",
            stdout=result.stdout,
            stderr=result.stderr,
        )

    async def _action_deploy(self, command: str | None = None, **kwargs: Any) -> dict[str, Any]:
        deploy_command = (command or "").strip() or self.config.deploy_command or DEFAULT_DEPLOY_COMMAND
        result = await self.runner.run(split_command(deploy_command), timeout=self.config.deploy_timeout)
        return self._success(
            "deploy",
            "Deploy completed.",
            command=deploy_command,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    @staticmethod
    def _require(value: str | None, label: str) -> str:
        text = (value or "").strip()
        if not text:
            raise ValueError(f"{label} is required")
        return text

    def _success(self, action: str, summary: str, **data: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {"ok": True, "action": action, "summary": summary}
        payload.update(data)
        payload.setdefault("errors", [])
        return payload

    def _error(self, action: str, message: str) -> dict[str, Any]:
        return {
            "ok": False,
            "action": action,
            "summary": message,
            "errors": [message],
        }
