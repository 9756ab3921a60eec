"""Hexo blog management tool."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from hexobot.agent.tools.base import Tool
from hexobot.agent.tools.hexo.service import ACTIONS, MAX_LIST_LIMIT, HexoService

if TYPE_CHECKING:
    from hexobot.config.schema import HexoToolConfig


class HexoTool(Tool):
    """Manage posts of a Hexo blog and run its build/deploy commands."""

    name = "hexo"
    description = (
        "Manage Hexo blog posts in source/_posts: list, read, create, update, delete, "
        "list tags/categories, run hexo generate, and deploy."
    )

    parameters = {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": list(ACTIONS),
                "description": "Hexo action to perform",
            },
            "filename": {"type": "string", "description": 'Post filename, e.g. "my-post.md"'},
            "title": {"type": "string", "description": "Post title"},
            "content": {"type": "string", "description": "Post body (markdown); replaces the body on update"},
            "tags": {"type": "array", "items": {"type": "string"}, "description": "Post tags"},
            "categories": {"type": "array", "items": {"type": "string"}, "description": "Post categories"},
            "slug": {"type": "string", "description": "Filename slug (derived from title if omitted)"},
            "date": {"type": "string", "description": "Post date, YYYY-MM-DD HH:mm:ss (default: now)"},
            "tag": {"type": "string", "description": "Tag filter for list_posts"},
            "category": {"type": "string", "description": "Category filter for list_posts"},
            "limit": {
                "type": "integer",
                "minimum": 1,
                "maximum": MAX_LIST_LIMIT,
                "description": "Max posts to return for list_posts (default: 50)",
            },
            "command": {"type": "string", "description": "Deploy command override"},
        },
        "required": ["action"],
    }

    def __init__(self, hexo_config: HexoToolConfig | None = None, service: HexoService | None = None):
        self._service = service or HexoService(hexo_config)

    async def execute(self, action: str, **kwargs: Any) -> str:
        result = await self._service.handle(action=action, **kwargs)
        return json.dumps(result, ensure_ascii=False)
