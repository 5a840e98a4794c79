"""Fluent builder for ``ConfigurationRoot``."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union

from provider_runtime.configuration.providers import (
    ConfigurationProvider,
    EnvironmentVariablesConfigurationProvider,
    JsonConfigurationProvider,
    MemoryConfigurationProvider,
)
from provider_runtime.configuration.root import ConfigurationRoot


class ConfigurationBuilder:
    """Collects providers in priority order (last added wins).

    Example:
        configuration = (
            ConfigurationBuilder()
            .add_json_file("appsettings.json", optional=True)
            .add_environment_variables()
            .build()
        )
    """

    def __init__(self) -> None:
        """Start with no providers."""
        self.providers: List[ConfigurationProvider] = []

    def add(self, provider: ConfigurationProvider) -> "ConfigurationBuilder":
        """Append an arbitrary provider."""
        self.providers.append(provider)
        return self

    def add_in_memory(self, data: Mapping[str, Any]) -> "ConfigurationBuilder":
        """Append a provider over a nested mapping."""
        return self.add(MemoryConfigurationProvider(data))

    def add_json_file(
        self, path: Union[str, Path], *, optional: bool = False
    ) -> "ConfigurationBuilder":
        """Append a provider over a JSON file."""
        return self.add(JsonConfigurationProvider(path, optional=optional))

    def add_environment_variables(
        self, prefix: str = "", environ: Optional[Mapping[str, str]] = None
    ) -> "ConfigurationBuilder":
        """Append a provider over environment variables."""
        return self.add(EnvironmentVariablesConfigurationProvider(prefix, environ))

    def build(self) -> ConfigurationRoot:
        """Load every provider and return the merged root."""
        return ConfigurationRoot(self.providers)
