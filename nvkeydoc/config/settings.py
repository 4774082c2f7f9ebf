"""Configuration utilities for nvkeydoc.

Settings are resolved in this order: CLI option, environment variable,
YAML config file, built-in default.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from nvkeydoc.exceptions import ConfigurationError

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_DEFINITIONS_DIR, DEFAULT_INITVIM, ENV_VAR_DEFINITIONS

logger = logging.getLogger(__name__)

KNOWN_SETTINGS = {"initvim", "definitions"}


@dataclass
class Settings:
    """Resolved settings for a run."""

    initvim: Path
    definitions: Path


def get_config_path() -> Path:
    """Get the config file path, respecting NVKEYDOC_CONFIG."""
    override = os.environ.get("NVKEYDOC_CONFIG")
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from the YAML config file.

    Returns:
        Dictionary with configuration, or empty dict if the file doesn't
        exist or cannot be parsed
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config {config_path}: {e}")
        return {}

    if config is None:
        return {}

    if not isinstance(config, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping")
        return {}

    for key in config:
        if key not in KNOWN_SETTINGS:
            logger.warning(f"Unknown setting '{key}' in {config_path}")

    return config


def _setting(name: str, cli_value: Optional[str], config: Dict[str, Any], default: str) -> Path:
    if cli_value:
        return Path(cli_value).expanduser()

    for env_name, definition in ENV_VAR_DEFINITIONS.items():
        if definition.get("setting") == name and os.environ.get(env_name):
            return Path(os.environ[env_name]).expanduser()

    value = config.get(name)
    if value is not None:
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Setting '{name}' must be a path string, got {type(value).__name__}",
                setting=name,
            )
        return Path(value).expanduser()

    return Path(default).expanduser()


def get_settings(
    initvim: Optional[str] = None,
    definitions: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """
    Resolve the settings of a run.

    Args:
        initvim: Value of --initvim, if given
        definitions: Value of --definitions, if given
        config_path: Config file to read instead of the default one

    Raises:
        ConfigurationError: if the config file holds a non-string path
    """
    config = load_config(config_path)
    return Settings(
        initvim=_setting("initvim", initvim, config, DEFAULT_INITVIM),
        definitions=_setting("definitions", definitions, config, str(DEFAULT_DEFINITIONS_DIR)),
    )
