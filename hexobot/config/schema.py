"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HexoToolConfig(Base):
    """Hexo blog tool configuration."""

    dir: str = ""  # Hexo project root; empty means HEXO_DIR or the current directory
    deploy_command: str = ""  # Empty means HEXO_DEPLOY_CMD or "npx hexo deploy"
    generate_timeout: int = 60
    deploy_timeout: int = 120


class WebSearchConfig(Base):
    """DuckDuckGo HTML search configuration."""

    endpoint: str = "https://html.duckduckgo.com/html/"
    max_results: int = 8
    timeout: float = 10.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


class WebFetchConfig(Base):
    """Limits applied when fetching a single URL."""

    timeout: float = 10.0
    max_redirects: int = 5
    max_bytes: int = 1024 * 1024
    user_agent: str = "HexobotFetch/1.0 (Web Fetch)"
    allow_private_network: bool = False


class WebToolsConfig(Base):
    """Web tools configuration."""

    search: WebSearchConfig = Field(default_factory=WebSearchConfig)
    fetch: WebFetchConfig = Field(default_factory=WebFetchConfig)


class ToolsConfig(Base):
    """Tools configuration."""

    hexo: HexoToolConfig = Field(default_factory=HexoToolConfig)
    web: WebToolsConfig = Field(default_factory=WebToolsConfig)


class Config(Base):
    """Root configuration for hexobot."""

    tools: ToolsConfig = Field(default_factory=ToolsConfig)
