"""Unit tests for settings."""

from __future__ import annotations

from pathlib import Path

from abacpolicy.core.config import LogLevel, PolicySettings, Settings, configure_settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_default_values(self):
        """Test default settings values."""
        settings = Settings()
        assert settings.policy.files == []
        assert settings.policy.include_defaults is False
        assert settings.observability.log_level == LogLevel.INFO
        assert settings.observability.metrics_enabled is True

    def test_files_from_comma_separated_string(self):
        """Test parsing policy files from a comma-separated string."""
        policy = PolicySettings(files="base.json, extra.yaml,")
        assert policy.files == [Path("base.json"), Path("extra.yaml")]

    def test_nested_environment(self, monkeypatch):
        """Test reading nested settings from the environment."""
        monkeypatch.setenv("ABACPOLICY_POLICY__INCLUDE_DEFAULTS", "true")
        monkeypatch.setenv("ABACPOLICY_OBSERVABILITY__LOG_LEVEL", "DEBUG")

        settings = Settings()
        assert settings.policy.include_defaults is True
        assert settings.observability.log_level == LogLevel.DEBUG

    def test_files_from_environment(self, monkeypatch):
        """Test reading a comma-separated file list from the environment."""
        monkeypatch.setenv("ABACPOLICY_POLICY__FILES", "a.json,b.json")

        settings = Settings()
        assert settings.policy.files == [Path("a.json"), Path("b.json")]

    def test_configure_settings(self):
        """Test replacing the global settings."""
        custom = Settings(environment="production")
        configure_settings(custom)
        assert get_settings() is custom
