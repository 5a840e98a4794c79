"""Hierarchical configuration: providers, root, sections and builder."""

from provider_runtime.configuration.binding import ConfigurationModel, match_field_keys
from provider_runtime.configuration.builder import ConfigurationBuilder
from provider_runtime.configuration.providers import (
    ConfigurationProvider,
    EnvironmentVariablesConfigurationProvider,
    JsonConfigurationProvider,
    MemoryConfigurationProvider,
)
from provider_runtime.configuration.root import ConfigurationRoot, ConfigurationSection

__all__ = [
    "ConfigurationBuilder",
    "ConfigurationModel",
    "ConfigurationProvider",
    "ConfigurationRoot",
    "ConfigurationSection",
    "EnvironmentVariablesConfigurationProvider",
    "JsonConfigurationProvider",
    "MemoryConfigurationProvider",
    "match_field_keys",
]
