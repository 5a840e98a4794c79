"""Unit tests for RuntimeSettings."""

import pytest
from pydantic import ValidationError

from provider_runtime.core.config import Environment, LogFormat, RuntimeSettings


class TestRuntimeSettings:
    """Environment-driven runtime settings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "prd")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("CONFIG_ENV_PREFIX", "APP_")

        settings = RuntimeSettings()

        assert settings.ENVIRONMENT == Environment.PRD
        assert settings.LOG_FORMAT == LogFormat.JSON
        assert settings.CONFIG_ENV_PREFIX == "APP_"

    def test_log_level_normalized(self):
        assert RuntimeSettings(LOG_LEVEL=" warning ").LOG_LEVEL == "WARNING"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            RuntimeSettings(LOG_LEVEL="chatty")

    def test_json_files_parsed(self):
        settings = RuntimeSettings(CONFIG_JSON_FILES="a.json, ,b.json")

        assert settings.config_json_files == ["a.json", "b.json"]
