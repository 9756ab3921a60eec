"""Agent tools."""

from hexobot.agent.tools.base import Tool
from hexobot.agent.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolRegistry"]
