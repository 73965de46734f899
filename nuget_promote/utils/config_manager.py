"""
Configuration management utilities.

Feed URLs and credentials can be stored in a TOML file so they do not have to
be passed on every command line:

    [source]
    url = "https://api.nuget.org/v3/index.json"

    [destination]
    url = "https://nuget.example.com/v3/index.json"
    api_key = "..."
    username = "promoter"
    password = "..."
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_CONFIG_PATH

# Keys of a feed section that map onto FeedSettings fields
FEED_KEYS = ("url", "api_key", "username", "password")


class ConfigManager:
    """
    Manages configuration loading and access.

    Loads the TOML file once and offers dot-notation lookups.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None

    @property
    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
            logging.debug("Loaded configuration from %s", self.config_path)
            return self._config
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "destination.api_key").

        Args:
            key: Configuration key (supports dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self.load()

        for part in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(part)
            if value is None:
                return default

        return value

    def get_feed(self, section: str) -> Dict[str, str]:
        """
        Get the feed settings stored in a section.

        Args:
            section: Section name ("source" or "destination")

        Returns:
            Dictionary with the non-empty feed keys of the section
        """
        feed: Dict[str, str] = {}
        for key in FEED_KEYS:
            value = self.get(f"{section}.{key}")
            if isinstance(value, str) and value.strip():
                feed[key] = value.strip()
        return feed


__all__ = ["ConfigManager"]
