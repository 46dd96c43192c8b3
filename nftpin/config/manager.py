"""Configuration manager for nftpin."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from nftpin.config.defaults import (
    DEFAULT_CONFIG,
    ENV_OVERRIDES,
    FIELD_DESCRIPTIONS,
    REQUIRED_FIELDS,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


class ConfigManager:
    """Manages configuration loading, validation, and value access.

    Configuration is layered: built-in defaults, then an optional YAML file,
    then environment variables (optionally read from a ``.env`` file). The
    Pinata credentials normally arrive through the environment as
    ``PINATA_API_KEY`` and ``PINATA_SECRET_KEY``.

    Attributes:
        config: Dictionary containing all configuration values
        config_path: Path to the loaded configuration file (None if no file)

    Examples:
        >>> config = ConfigManager.load()
        >>> print(config.get("pinata.base_url"))
        'https://api.pinata.cloud'
    """

    def __init__(self, config: Dict[str, Any], config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config: Configuration dictionary
            config_path: Path to the configuration file (optional)
        """
        self.config = config
        self.config_path = config_path

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        env_file: Optional[str] = None,
        use_dotenv: bool = True,
        require_credentials: bool = True
    ) -> "ConfigManager":
        """Load configuration from defaults, file, and environment.

        Args:
            config_path: Path to a YAML configuration file (optional). When
                omitted, standard locations are searched and a missing file
                is not an error.
            env_file: Explicit ``.env`` file to load (optional)
            use_dotenv: Whether to look for a ``.env`` file at all
            require_credentials: Whether missing Pinata credentials are an error

        Returns:
            ConfigManager instance with loaded configuration

        Raises:
            ConfigError: If configuration cannot be loaded or validated
        """
        if config_path:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Configuration file not found: {path}")
        else:
            path = cls._find_config_file()

        if path:
            logger.info(f"Loading configuration from: {path}")
            config = cls._merge_with_defaults(cls._load_yaml(path))
        else:
            logger.debug("No configuration file found, using defaults")
            config = copy.deepcopy(DEFAULT_CONFIG)

        if env_file:
            env_path = Path(env_file).expanduser()
            if not env_path.exists():
                raise ConfigError(f"Environment file not found: {env_path}")
            load_dotenv(env_path)
            logger.debug(f"Loaded environment from: {env_path}")
        elif use_dotenv:
            found = find_dotenv(usecwd=True)
            if found:
                load_dotenv(found)
                logger.debug(f"Loaded environment from: {found}")

        cls._apply_environment(config)

        if require_credentials:
            cls._validate_required_fields(config)

        return cls(config, path)

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for config.yaml in standard locations.

        Search order:
        1. ~/.nftpin/config.yaml
        2. ./config.yaml

        Returns:
            Path to config file if found, None otherwise
        """
        search_paths = [
            Path.home() / ".nftpin" / "config.yaml",
            Path.cwd() / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                logger.debug(f"Found config file: {path}")
                return path

        return None

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        try:
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse YAML configuration: {path}\n"
                f"Error: {e}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file: {path}\n"
                f"Error: {e}"
            ) from e

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigError(
                f"Invalid configuration file: {path}\n"
                "Configuration must be a YAML dictionary."
            )

        return config

    @staticmethod
    def _merge_with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge loaded config with defaults.

        User config values take precedence over defaults.

        Args:
            config: Loaded configuration dictionary

        Returns:
            Merged configuration with defaults
        """
        def deep_merge(base: dict, updates: dict) -> dict:
            result = copy.deepcopy(base)
            for key, value in updates.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        return deep_merge(DEFAULT_CONFIG, config)

    @staticmethod
    def _apply_environment(config: Dict[str, Any]) -> None:
        """Override configuration fields from environment variables.

        Args:
            config: Configuration dictionary (modified in place)
        """
        for field_path, env_names in ENV_OVERRIDES.items():
            for env_name in env_names:
                value = os.environ.get(env_name)
                if value:
                    ConfigManager._set_nested_value(config, field_path, value)
                    logger.debug(f"{field_path} taken from ${env_name}")
                    break

    @staticmethod
    def _validate_required_fields(config: Dict[str, Any]) -> None:
        """Validate that all required fields are present.

        Args:
            config: Configuration dictionary

        Raises:
            ConfigError: If required fields are missing
        """
        missing = [
            field_path for field_path in REQUIRED_FIELDS
            if not ConfigManager._get_nested_value(config, field_path)
        ]

        if missing:
            lines = []
            for field_path in missing:
                env_names = " or ".join(ENV_OVERRIDES.get(field_path, []))
                description = FIELD_DESCRIPTIONS.get(field_path, field_path)
                lines.append(f"  - {field_path}: {description} (set {env_names})")
            raise ConfigError(
                "Missing required configuration fields:\n"
                + "\n".join(lines)
            )

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "pinata.timeout")
            default: Default value to return if key not found

        Returns:
            Configuration value or default
        """
        value = self._get_nested_value(self.config, key)
        return value if value is not None else default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation."""
        self._set_nested_value(self.config, key, value)

    @staticmethod
    def _get_nested_value(config: Dict[str, Any], key: str) -> Any:
        keys = key.split(".")
        value = config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    @staticmethod
    def _set_nested_value(config: Dict[str, Any], key: str, value: Any) -> None:
        keys = key.split(".")
        current = config

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return copy.deepcopy(self.config)

    def __repr__(self) -> str:
        """Return string representation of configuration."""
        path_str = f" from {self.config_path}" if self.config_path else ""
        return f"<ConfigManager{path_str}>"
