"""Configuration for nvkeydoc."""

from .settings import Settings, get_config_path, get_settings, load_config

__all__ = ["Settings", "get_config_path", "get_settings", "load_config"]
