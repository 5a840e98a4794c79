"""Hosting: the application builder and the service provider registration gate."""

from provider_runtime.hosting.builder import (
    HostApplication,
    HostApplicationBuilder,
    default_configuration,
)
from provider_runtime.hosting.registration import (
    RegistrationOutcome,
    RegistrationResult,
    register_service_provider,
    try_register_service_provider,
)
from provider_runtime.providers.registrar import provider_config_path

__all__ = [
    "HostApplication",
    "HostApplicationBuilder",
    "RegistrationOutcome",
    "RegistrationResult",
    "default_configuration",
    "provider_config_path",
    "register_service_provider",
    "try_register_service_provider",
]
