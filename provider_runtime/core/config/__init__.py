"""Configuration module for the provider runtime.

Provides the environment-driven runtime settings.

Usage:
    from provider_runtime.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from provider_runtime.core.config.enums import Environment, LogFormat
from provider_runtime.core.config.settings import RuntimeSettings

__all__ = [
    "RuntimeSettings",
    "Environment",
    "LogFormat",
    "settings",
]

# Singleton settings instance
settings = RuntimeSettings()
