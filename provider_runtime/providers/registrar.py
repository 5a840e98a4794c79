"""Registrar contract for service provider integrations.

A registrar knows one provider (``provider_type`` / ``provider_name``), the
settings type its configuration section binds into, and how to turn each
configured instance into registered services.

Example:
    class SqlRegistrar(
        ServiceProviderRegistrar[SqlSettings, SqlInstanceSettings, SqlHealthOptions]
    ):
        provider_type = "Persistence"
        provider_name = "Sql"
        settings_type = SqlSettings
        health_options_type = SqlHealthOptions

        def add_service_provider_instance(self, services, key, settings, configuration):
            services.add_keyed_singleton(SqlEngine, key, factory=lambda _: SqlEngine(settings))
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Type, TypeVar

from provider_runtime.configuration import ConfigurationRoot, ConfigurationSection
from provider_runtime.providers.settings import (
    HealthT,
    InstanceT,
    ServiceProviderHealthCheckOptions,
    ServiceProviderSettings,
)
from provider_runtime.services import ServiceCollection

PROVIDER_CONFIG_NAMESPACE = "Cirreum"

SettingsT = TypeVar("SettingsT", bound=ServiceProviderSettings)


def provider_config_path(provider_type: str, provider_name: str) -> str:
    """Configuration path of a provider: ``Cirreum:<type>:Providers:<name>``."""
    return f"{PROVIDER_CONFIG_NAMESPACE}:{provider_type}:Providers:{provider_name}"


class ServiceProviderRegistrar(ABC, Generic[SettingsT, InstanceT, HealthT]):
    """Base class for provider registrars.

    Subclasses must be constructible without arguments.
    """

    provider_type: ClassVar[str]
    provider_name: ClassVar[str]
    settings_type: ClassVar[Type[ServiceProviderSettings]]
    health_options_type: ClassVar[Type[ServiceProviderHealthCheckOptions]] = (
        ServiceProviderHealthCheckOptions
    )

    @property
    def config_path(self) -> str:
        """Configuration path this registrar reads."""
        return provider_config_path(self.provider_type, self.provider_name)

    def instance_section(
        self, configuration: ConfigurationRoot, key: str
    ) -> ConfigurationSection:
        """Raw configuration section of instance *key*, for provider-specific extras."""
        return configuration.get_section(self.config_path).get_section(f"Instances:{key}")

    def register(
        self,
        settings: SettingsT,
        services: ServiceCollection,
        configuration: ConfigurationRoot,
    ) -> None:
        """Register the provider's settings and every configured instance.

        The bound settings object is registered as a singleton under its own
        type, then each instance (in key order) is completed with its default
        name and health options and handed to ``add_service_provider_instance``.
        """
        services.add_singleton(type(settings), instance=settings)

        for key in sorted(settings.instances):
            instance = settings.instances[key]
            if not instance.name:
                instance.name = key
            if instance.health_checks is None:
                instance.health_checks = self.health_options_type()
            self.add_service_provider_instance(services, key, instance, configuration)

    @abstractmethod
    def add_service_provider_instance(
        self,
        services: ServiceCollection,
        key: str,
        settings: InstanceT,
        configuration: ConfigurationRoot,
    ) -> None:
        """Register the services for one configured instance."""
        ...
