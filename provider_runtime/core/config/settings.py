"""Runtime settings loaded from the process environment.

These settings configure the runtime itself (logging, where provider
configuration is loaded from). Provider configuration proper lives in the
hierarchical ``ConfigurationRoot``, not here.
"""

from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from provider_runtime.core.config.enums import Environment, LogFormat


class RuntimeSettings(BaseSettings):
    """Environment-driven runtime settings.

    Env vars are read without a prefix:
        LOG_LEVEL=DEBUG
        CONFIG_JSON_FILES=appsettings.json,appsettings.local.json
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.TEXT

    # Prefix of environment variables loaded into the configuration root.
    CONFIG_ENV_PREFIX: str = ""
    # Comma-separated JSON files, loaded in order before environment variables.
    CONFIG_JSON_FILES: str = ""

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def config_json_files(self) -> List[str]:
        """Parsed list of JSON configuration files."""
        return [path.strip() for path in self.CONFIG_JSON_FILES.split(",") if path.strip()]

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the DEBUG override."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL
