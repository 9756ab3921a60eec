"""Tool registry factory."""

from hexobot.agent.tools.hexo import HexoTool
from hexobot.agent.tools.registry import ToolRegistry
from hexobot.agent.tools.web import WebFetchTool, WebSearchTool
from hexobot.config.schema import Config


def build_tool_registry(config: Config | None = None) -> ToolRegistry:
    """Build the registry holding the hexo and web tools."""
    cfg = config or Config()
    registry = ToolRegistry()
    registry.register(HexoTool(hexo_config=cfg.tools.hexo))
    registry.register(WebSearchTool(web_search_config=cfg.tools.web.search))
    registry.register(WebFetchTool(web_fetch_config=cfg.tools.web.fetch))
    return registry
