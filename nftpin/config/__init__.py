"""Configuration management for nftpin."""

from nftpin.config.manager import ConfigManager, ConfigError
from nftpin.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigManager", "ConfigError", "DEFAULT_CONFIG"]
