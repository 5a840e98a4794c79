"""Provider integration contract: settings shapes and the registrar base class."""

from provider_runtime.providers.registrar import (
    PROVIDER_CONFIG_NAMESPACE,
    ServiceProviderRegistrar,
    provider_config_path,
)
from provider_runtime.providers.settings import (
    ServiceProviderHealthCheckOptions,
    ServiceProviderInstanceSettings,
    ServiceProviderSettings,
)

__all__ = [
    "PROVIDER_CONFIG_NAMESPACE",
    "ServiceProviderHealthCheckOptions",
    "ServiceProviderInstanceSettings",
    "ServiceProviderRegistrar",
    "ServiceProviderSettings",
    "provider_config_path",
]
