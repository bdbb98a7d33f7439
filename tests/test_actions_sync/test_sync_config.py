"""
Tests for sync configuration
"""

import pytest

from src.actions_sync.config import (
    DEFAULT_PAYLOAD_WARNING_CHARS,
    DEFAULT_TAG_WINDOW,
    SyncConfig,
)
from src.actions_sync.exceptions import ConfigError


class TestSyncConfig:
    """Test SyncConfig defaults and validation."""

    def test_defaults(self):
        """Test default policy values."""
        config = SyncConfig()

        assert config.tag_window == DEFAULT_TAG_WINDOW == 10
        assert config.payload_warning_chars == DEFAULT_PAYLOAD_WARNING_CHARS == 32000
        assert config.max_uploads is None
        assert config.api_url is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tag_window": 0},
            {"payload_warning_chars": -1},
            {"max_uploads": 0},
            {"request_timeout": 0},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        """Test validation of policy values."""
        with pytest.raises(ConfigError):
            SyncConfig(**kwargs)

    def test_config_error_is_value_error(self):
        """Test that ConfigError can be handled as ValueError."""
        with pytest.raises(ValueError):
            SyncConfig(tag_window=-5)


class TestSyncConfigFromEnv:
    """Test environment-driven configuration."""

    def test_from_empty_env(self):
        """Test that an empty environment yields defaults."""
        config = SyncConfig.from_env()

        assert config == SyncConfig()

    def test_reads_environment(self, monkeypatch):
        """Test that environment variables are applied."""
        monkeypatch.setenv("ACTIONS_API_URL", "https://marketplace.example.net")
        monkeypatch.setenv("ACTIONS_API_FUNCTION_KEY", "key")
        monkeypatch.setenv("SYNC_TAG_WINDOW", "5")
        monkeypatch.setenv("SYNC_PAYLOAD_WARNING_CHARS", "1000")
        monkeypatch.setenv("SYNC_MAX_UPLOADS", "25")
        monkeypatch.setenv("ACTIONS_API_TIMEOUT", "2.5")

        config = SyncConfig.from_env()

        assert config.api_url == "https://marketplace.example.net"
        assert config.function_key == "key"
        assert config.tag_window == 5
        assert config.payload_warning_chars == 1000
        assert config.max_uploads == 25
        assert config.request_timeout == 2.5

    def test_overrides_win_over_environment(self, monkeypatch):
        """Test explicit overrides."""
        monkeypatch.setenv("SYNC_MAX_UPLOADS", "25")
        monkeypatch.setenv("ACTIONS_API_FUNCTION_KEY", "from-env")

        config = SyncConfig.from_env(max_uploads=3, function_key=None)

        assert config.max_uploads == 3
        assert config.function_key == "from-env"

    def test_blank_values_use_defaults(self, monkeypatch):
        """Test that blank variables are ignored."""
        monkeypatch.setenv("SYNC_TAG_WINDOW", "  ")
        monkeypatch.setenv("ACTIONS_API_URL", "")

        config = SyncConfig.from_env()

        assert config.tag_window == DEFAULT_TAG_WINDOW
        assert config.api_url is None

    def test_invalid_number(self, monkeypatch):
        """Test that a non-numeric value is reported with its name."""
        monkeypatch.setenv("SYNC_TAG_WINDOW", "ten")

        with pytest.raises(ConfigError, match="SYNC_TAG_WINDOW"):
            SyncConfig.from_env()
