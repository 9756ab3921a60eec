"""Configuration loading utilities."""

import json
import os
from pathlib import Path

from loguru import logger

from hexobot.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".hexobot" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object with environment overrides applied.
    """
    path = config_path or get_config_path()
    config = Config()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            data = _migrate_config(data)
            config = Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return _apply_env_overrides(config)


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _apply_env_overrides(config: Config) -> Config:
    """Fill empty hexo settings from HEXO_DIR / HEXO_DEPLOY_CMD."""
    hexo = config.tools.hexo
    if not hexo.dir:
        hexo.dir = os.environ.get("HEXO_DIR", "")
    if not hexo.deploy_command:
        hexo.deploy_command = os.environ.get("HEXO_DEPLOY_CMD", "")
    return config


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    tools = data.setdefault("tools", {})
    hexo_cfg = tools.setdefault("hexo", {})

    # Move legacy top-level hexoDir -> tools.hexo.dir
    legacy_dir = data.pop("hexoDir", None)
    if legacy_dir and not hexo_cfg.get("dir"):
        hexo_cfg["dir"] = legacy_dir

    # Move legacy top-level deployCmd -> tools.hexo.deployCommand
    legacy_deploy = data.pop("deployCmd", None)
    if legacy_deploy and not hexo_cfg.get("deployCommand"):
        hexo_cfg["deployCommand"] = legacy_deploy

    # Move legacy tools.web.maxFetchSize -> tools.web.fetch.maxBytes
    web_cfg = tools.setdefault("web", {})
    legacy_size = web_cfg.pop("maxFetchSize", None)
    if legacy_size is not None:
        fetch_cfg = web_cfg.setdefault("fetch", {})
        fetch_cfg.setdefault("maxBytes", legacy_size)

    return data
