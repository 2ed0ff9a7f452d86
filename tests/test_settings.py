"""
Tests for settings and logging configuration.
"""

import logging

import structlog

from src.config import Settings, configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults without any environment."""
        for name in ("AZURE_STORAGE_PROTOCOL", "LOG_FORMAT", "AZURE_STORAGE_CONNECTION_STRING"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.azure_storage_protocol == "https"
        assert settings.log_format == "json"
        assert settings.azure_connection_string_str is None

    def test_from_environment(self, monkeypatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("AZURE_STORAGE_ACCOUNT_NAME", "acct")
        monkeypatch.setenv("AZURE_STORAGE_ACCOUNT_KEY", "a2V5")
        monkeypatch.setenv("AZURE_STORAGE_PROTOCOL", "http")
        monkeypatch.setenv("LIST_MAX_RESULTS", "50")

        settings = Settings(_env_file=None)

        assert settings.azure_storage_account_name == "acct"
        assert settings.azure_account_key_str == "a2V5"
        assert settings.azure_storage_protocol == "http"
        assert settings.list_max_results == 50

    def test_secret_not_rendered(self):
        """Test the account key is masked in reprs."""
        settings = Settings(_env_file=None, azure_storage_account_key="a2V5")

        assert "a2V5" not in repr(settings)


class TestLogging:
    """Tests for structlog configuration."""

    def test_configure_text(self, capsys):
        """Test text logging renders the event and context."""
        configure_logging("INFO", "text")
        try:
            structlog.get_logger("test").info("Blob written", container="docs")
        finally:
            structlog.reset_defaults()

        err = capsys.readouterr().err
        assert "Blob written" in err
        assert "container=docs" in err

    def test_configure_filters_level(self, capsys):
        """Test events below the configured level are dropped."""
        configure_logging("WARNING", "json")
        try:
            structlog.get_logger("test").info("hidden")
        finally:
            structlog.reset_defaults()

        assert "hidden" not in capsys.readouterr().err
        assert logging.getLogger().level == logging.WARNING
