"""Tests for ConfigManager class."""

from pathlib import Path
from unittest.mock import patch

import pytest

from nuget_promote.utils.config_manager import ConfigManager
from nuget_promote.utils.constants import DEFAULT_CONFIG_PATH


class TestConfigManagerInit:
    """Tests for ConfigManager initialization."""

    def test_init_with_path(self):
        """Test ConfigManager initialization with explicit path."""
        config_path = "/tmp/test_config.toml"
        manager = ConfigManager(config_path)
        assert manager.config_path == Path(config_path).expanduser()
        assert manager._config is None

    def test_init_without_path(self):
        """Test ConfigManager initialization with default path."""
        manager = ConfigManager()
        assert manager.config_path == Path(DEFAULT_CONFIG_PATH).expanduser()
        assert manager._config is None

    def test_exists(self, temp_config_file, tmp_path):
        """Test the exists property."""
        assert ConfigManager(str(temp_config_file)).exists
        assert not ConfigManager(str(tmp_path / "missing.toml")).exists


class TestConfigManagerLoad:
    """Tests for ConfigManager.load() method."""

    def test_load_cached_config(self):
        """Test load() returns cached config."""
        manager = ConfigManager()
        manager._config = {"test": "value"}

        assert manager.load() == {"test": "value"}

    def test_load_file_not_found(self, tmp_path):
        """Test load() raises FileNotFoundError when file doesn't exist."""
        config_path = tmp_path / "nonexistent.toml"
        manager = ConfigManager(str(config_path))

        with pytest.raises(FileNotFoundError) as exc_info:
            manager.load()

        assert str(config_path) in str(exc_info.value)

    def test_load_success(self, temp_config_file):
        """Test load() successfully loads TOML file."""
        manager = ConfigManager(str(temp_config_file))
        result = manager.load()

        assert result["destination"]["api_key"] == "destination-key"
        assert manager._config == result

    def test_load_invalid_toml(self, create_temp_file):
        """Test load() raises ValueError for invalid TOML."""
        config_path = create_temp_file("config.toml", "invalid toml content [unclosed")

        with pytest.raises(ValueError, match="Invalid TOML"):
            ConfigManager(str(config_path)).load()

    def test_load_io_error(self, temp_config_file):
        """Test load() raises ValueError for IO errors."""
        manager = ConfigManager(str(temp_config_file))

        with patch("builtins.open", side_effect=PermissionError("Permission denied")):
            with pytest.raises(ValueError, match="Failed to load configuration"):
                manager.load()


class TestConfigManagerGet:
    """Tests for ConfigManager.get() method."""

    def test_get_loads_config_if_needed(self, temp_config_file):
        """Test get() loads config if not already loaded."""
        manager = ConfigManager(str(temp_config_file))
        assert manager._config is None

        assert manager.get("source.url") == "https://source.example.com/v3/index.json"
        assert manager._config is not None

    def test_get_missing_key(self):
        """Test get() returns default for missing key."""
        manager = ConfigManager()
        manager._config = {"source": {"url": "https://example.com"}}

        assert manager.get("source.api_key", "default") == "default"
        assert manager.get("missing.key") is None

    def test_get_non_dict_value(self):
        """Test get() returns default when an intermediate value is not a table."""
        manager = ConfigManager()
        manager._config = {"source": "not a table"}

        assert manager.get("source.url", "default") == "default"


class TestConfigManagerGetFeed:
    """Tests for ConfigManager.get_feed() method."""

    def test_get_feed(self, temp_config_file):
        """Test that a feed section maps onto feed settings keys."""
        manager = ConfigManager(str(temp_config_file))

        assert manager.get_feed("destination") == {
            "url": "https://destination.example.com/v3/index.json",
            "api_key": "destination-key",
            "username": "promoter",
            "password": "secret",
        }
        assert manager.get_feed("source") == {"url": "https://source.example.com/v3/index.json"}

    def test_get_feed_skips_blank_and_foreign_values(self):
        """Test that blank strings and non-string values are ignored."""
        manager = ConfigManager()
        manager._config = {"destination": {"url": "  ", "api_key": 42, "username": " promoter ", "extra": "x"}}

        assert manager.get_feed("destination") == {"username": "promoter"}

    def test_get_feed_missing_section(self):
        """Test that a missing section gives an empty mapping."""
        manager = ConfigManager()
        manager._config = {}

        assert manager.get_feed("source") == {}
