"""Host application builder.

The builder is the bootstrap orchestrator: it owns the configuration root,
the service collection (and with it the registration markers) and a deferred
startup logger. ``build()`` flushes startup logs and freezes the container.

Usage:
    builder = HostApplicationBuilder()
    register_service_provider(builder, SqlRegistrar, required=True)
    app = builder.build()
    engine = app.resolve(SqlEngine, key="default")
"""

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from punq import Container

from provider_runtime.configuration import ConfigurationBuilder, ConfigurationRoot
from provider_runtime.core.config import RuntimeSettings
from provider_runtime.core.logging import DeferredLogger, LoggerConfigurator, logger
from provider_runtime.services import ServiceCollection

startup_logger = logger.with_prefix("Startup: ").with_context(component="host_builder")


def default_configuration(settings: RuntimeSettings) -> ConfigurationRoot:
    """Build the default configuration root: JSON files, then environment variables."""
    builder = ConfigurationBuilder()
    for path in settings.config_json_files:
        builder.add_json_file(path, optional=True)
    builder.add_environment_variables(settings.CONFIG_ENV_PREFIX)
    return builder.build()


@dataclass(frozen=True)
class HostApplication:
    """Built application: configuration plus the frozen service container."""

    configuration: ConfigurationRoot
    container: Container

    def resolve(self, service: Hashable, key: Optional[str] = None) -> Any:
        """Resolve *service*, or its keyed registration when *key* is given."""
        return self.container.resolve(service if key is None else (service, key))


class HostApplicationBuilder:
    """Collects configuration and service registrations during bootstrap."""

    def __init__(
        self,
        configuration: Optional[ConfigurationRoot] = None,
        settings: Optional[RuntimeSettings] = None,
    ) -> None:
        """Create a builder.

        Args:
            configuration: Configuration root; defaults to the JSON files and
                environment variables named by *settings*.
            settings: Runtime settings; defaults to the process-wide singleton.
                They also configure the runtime log handler.
        """
        if settings is None:
            from provider_runtime.core.config import settings as default_settings

            settings = default_settings

        self.settings = settings
        LoggerConfigurator.setup(settings)
        self.configuration = (
            configuration if configuration is not None else default_configuration(settings)
        )
        self.services = ServiceCollection()
        self.logger = DeferredLogger(startup_logger)

    def build(self) -> HostApplication:
        """Flush deferred startup logs and build the application."""
        replayed = self.logger.flush()
        startup_logger.debug(f"Replayed {replayed} deferred startup log entries.")
        return HostApplication(
            configuration=self.configuration,
            container=self.services.build_provider(),
        )
