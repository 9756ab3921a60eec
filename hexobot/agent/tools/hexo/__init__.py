"""Hexo blog tools package."""

from hexobot.agent.tools.hexo.frontmatter import build_front_matter, parse_front_matter, read_document
from hexobot.agent.tools.hexo.models import ParsedDocument, Post, PostMetadata
from hexobot.agent.tools.hexo.service import HexoService
from hexobot.agent.tools.hexo.tool import HexoTool

__all__ = [
    "HexoService",
    "HexoTool",
    "ParsedDocument",
    "Post",
    "PostMetadata",
    "build_front_matter",
    "parse_front_matter",
    "read_document",
]
