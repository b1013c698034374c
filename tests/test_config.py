"""Tests for settings loading and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from prefstore.config import Settings, configure_logging, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PREFSTORE_DATABASE_URL", "PREFSTORE_LOG_LEVEL", "PREFSTORE_ASSOC_EXPIRY_MODE"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///./prefstore.db"
        assert settings.assoc_expiry_mode == "legacy"
        assert settings.strict_key_folding is False
        assert settings.log_level == "INFO"

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("PREFSTORE_STRICT_KEY_FOLDING", "true")
        monkeypatch.setenv("PREFSTORE_ASSOC_EXPIRY_MODE", "consistent")
        settings = get_settings()
        assert settings.strict_key_folding is True
        assert settings.assoc_expiry_mode == "consistent"

    def test_postgres_scheme_is_fixed(self):
        settings = Settings(_env_file=None, database_url="postgres://u:p@db/prefs")
        assert settings.database_url == "postgresql://u:p@db/prefs"

    def test_empty_database_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="  ")

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_unknown_assoc_mode_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, assoc_expiry_mode="sometimes")


class TestConfigureLogging:
    @pytest.fixture
    def basic_config_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_uses_settings_level_and_format(self, basic_config_calls):
        configure_logging(Settings(_env_file=None, log_level="warning"))
        assert basic_config_calls == [
            {
                "level": "WARNING",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            }
        ]

    def test_defaults_to_environment(self, basic_config_calls, monkeypatch):
        monkeypatch.setenv("PREFSTORE_LOG_LEVEL", "debug")
        configure_logging()
        assert basic_config_calls[0]["level"] == "DEBUG"
