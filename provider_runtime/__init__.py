"""Configuration-driven service provider registration.

Usage:
    from provider_runtime import HostApplicationBuilder, register_service_provider

    builder = HostApplicationBuilder()
    register_service_provider(builder, SqlRegistrar, required=True)
    app = builder.build()
"""

from provider_runtime.configuration import ConfigurationBuilder, ConfigurationRoot
from provider_runtime.core.exceptions import (
    ConfigurationError,
    ConfigurationInvalidError,
    ConfigurationMissingError,
)
from provider_runtime.hosting import (
    HostApplication,
    HostApplicationBuilder,
    RegistrationOutcome,
    RegistrationResult,
    register_service_provider,
    try_register_service_provider,
)
from provider_runtime.providers import (
    ServiceProviderHealthCheckOptions,
    ServiceProviderInstanceSettings,
    ServiceProviderRegistrar,
    ServiceProviderSettings,
    provider_config_path,
)
from provider_runtime.services import ServiceCollection

__all__ = [
    "ConfigurationBuilder",
    "ConfigurationError",
    "ConfigurationInvalidError",
    "ConfigurationMissingError",
    "ConfigurationRoot",
    "HostApplication",
    "HostApplicationBuilder",
    "RegistrationOutcome",
    "RegistrationResult",
    "ServiceCollection",
    "ServiceProviderHealthCheckOptions",
    "ServiceProviderInstanceSettings",
    "ServiceProviderRegistrar",
    "ServiceProviderSettings",
    "provider_config_path",
    "register_service_provider",
    "try_register_service_provider",
]
