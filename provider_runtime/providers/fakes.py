"""Fake provider types and registrars — used in unit tests."""

from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Tuple, Type

from provider_runtime.configuration import ConfigurationRoot
from provider_runtime.providers.registrar import ServiceProviderRegistrar
from provider_runtime.providers.settings import (
    ServiceProviderHealthCheckOptions,
    ServiceProviderInstanceSettings,
    ServiceProviderSettings,
)
from provider_runtime.services import ServiceCollection


class FakeHealthOptions(ServiceProviderHealthCheckOptions):
    """Health options with one provider-specific field."""

    probe_query: str = "SELECT 1"


class FakeInstanceSettings(ServiceProviderInstanceSettings[FakeHealthOptions]):
    """Instance settings with one provider-specific field."""

    region: Optional[str] = None


class FakeSettings(ServiceProviderSettings[FakeInstanceSettings]):
    """Provider settings for the fake registrar."""


@dataclass
class FakeClient:
    """Service registered once per configured instance."""

    key: str
    settings: FakeInstanceSettings


class FakeRegistrar(
    ServiceProviderRegistrar[FakeSettings, FakeInstanceSettings, FakeHealthOptions]
):
    """Registrar that records every ``register`` call on its class.

    Use ``make_fake_registrar`` to get a fresh subclass (and a fresh call log)
    per test.
    """

    provider_type = "Fake"
    provider_name = "default"
    settings_type = FakeSettings
    health_options_type = FakeHealthOptions

    register_calls: ClassVar[List[Tuple[FakeSettings, ServiceCollection, ConfigurationRoot]]] = []
    instances_created: ClassVar[int] = 0

    def __init__(self) -> None:
        """Count constructions."""
        type(self).instances_created += 1

    def register(
        self,
        settings: FakeSettings,
        services: ServiceCollection,
        configuration: ConfigurationRoot,
    ) -> None:
        """Record the call, then register as usual."""
        type(self).register_calls.append((settings, services, configuration))
        super().register(settings, services, configuration)

    def add_service_provider_instance(
        self,
        services: ServiceCollection,
        key: str,
        settings: FakeInstanceSettings,
        configuration: ConfigurationRoot,
    ) -> None:
        """Register a ``FakeClient`` under the instance key."""
        services.add_keyed_singleton(FakeClient, key, instance=FakeClient(key, settings))


def make_fake_registrar(
    provider_type: str = "Fake",
    provider_name: str = "default",
    *,
    name: str = "FakeRegistrar",
    **attributes: Any,
) -> Type[FakeRegistrar]:
    """Create a distinct ``FakeRegistrar`` subclass with its own call log."""
    namespace = {
        "provider_type": provider_type,
        "provider_name": provider_name,
        "register_calls": [],
        "instances_created": 0,
        **attributes,
    }
    return type(name, (FakeRegistrar,), namespace)
