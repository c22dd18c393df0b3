"""
Unit tests for configuration module.
"""
import os
from unittest.mock import patch

import pytest

from remarkdeck.core import Settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        settings = Settings()

        assert settings.app_name == "RemarkDeck"
        assert settings.host == "0.0.0.0"
        assert settings.port == 7005
        assert settings.debug is False

    def test_governor_defaults(self, clean_environment):
        """Test cache and rate limit defaults."""
        settings = Settings()

        assert settings.cache_max_entries == 10
        assert settings.cache_slot == "ai-slides-cache"
        assert settings.max_input_length == 2000
        assert settings.rate_limit_max_requests == 15
        assert settings.rate_limit_window_seconds == 3600

    def test_port_validation(self):
        """Test that port validation works."""
        with pytest.raises(ValueError):
            Settings(port=0)  # Below minimum

        with pytest.raises(ValueError):
            Settings(port=70000)  # Above maximum

        settings = Settings(port=8080)
        assert settings.port == 8080

    def test_cache_size_validation(self):
        """Test that the cache must hold at least one deck."""
        with pytest.raises(ValueError):
            Settings(cache_max_entries=0)

    def test_path_properties(self, tmp_path):
        """Test that path properties return correct values."""
        settings = Settings(data_dir=tmp_path)

        assert settings.storage_dir == tmp_path / "storage"

    @patch.dict(os.environ, {
        "AZURE_OPENAI_ENDPOINT": "https://test.openai.azure.com/",
        "AZURE_OPENAI_DEPLOYMENT": "gpt-4o",
    })
    def test_has_azure_openai(self):
        """Test Azure OpenAI detection."""
        settings = Settings()

        assert settings.has_azure_openai is True
        assert settings.llm_provider == "azure"

    def test_no_provider(self):
        """Test when no LLM provider is configured."""
        settings = Settings(azure_openai_endpoint=None)

        assert settings.has_azure_openai is False
        assert settings.llm_provider == "none"

    def test_has_moderation(self):
        """Test moderation detection."""
        assert Settings(openai_api_key="sk-test").has_moderation is True
        assert Settings(openai_api_key=None).has_moderation is False

    def test_ensure_directories(self, tmp_path):
        """Test directory creation."""
        settings = Settings(data_dir=tmp_path / "data")
        settings.ensure_directories()

        assert settings.data_dir.exists()
        assert settings.storage_dir.exists()


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self):
        """Test that get_settings returns a Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_cached_instance(self):
        """Test that get_settings returns the same cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
