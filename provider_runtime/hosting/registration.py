"""Service provider registration gate.

``try_register_service_provider`` decides, once per registrar type per
builder, whether to bind the registrar's configuration section and invoke it:

1. A registrar type already seen by this builder is skipped.
2. The type is marked before anything else, so a failure below is not retried.
3. A missing section is skipped, or fails when ``required``.
4. A section that cannot bind to the registrar's settings type fails.
5. Settings with zero instances are skipped.
6. Otherwise the registrar registers its services.

Failures come back as values on ``RegistrationResult``;
``register_service_provider`` is the raising variant.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Type

from pydantic import ValidationError

from provider_runtime.core.exceptions import (
    ConfigurationError,
    ConfigurationInvalidError,
    ConfigurationMissingError,
)
from provider_runtime.providers.registrar import ServiceProviderRegistrar, provider_config_path

if TYPE_CHECKING:
    from provider_runtime.hosting.builder import HostApplicationBuilder


class RegistrationOutcome(str, Enum):
    """What the gate did with a registrar."""

    REGISTERED = "registered"
    DUPLICATE = "duplicate"
    MISSING_CONFIGURATION = "missing_configuration"
    NO_INSTANCES = "no_instances"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of one pass through the gate."""

    builder: "HostApplicationBuilder"
    outcome: RegistrationOutcome
    error: Optional[ConfigurationError] = None
    instance_count: int = 0

    @property
    def ok(self) -> bool:
        """Whether the pass ended without a fatal error."""
        return self.error is None


def try_register_service_provider(
    builder: "HostApplicationBuilder",
    registrar_type: Type[ServiceProviderRegistrar],
    *,
    required: bool = False,
) -> RegistrationResult:
    """Run *registrar_type* through the registration gate.

    Args:
        builder: Host builder owning configuration, services and markers.
        registrar_type: Registrar class; instantiated with no arguments.
        required: Treat a missing configuration section as fatal.

    Returns:
        A ``RegistrationResult``. ``error`` is set only for a missing required
        section (``ConfigurationMissingError``) or a section that does not bind
        (``ConfigurationInvalidError``); the builder is returned either way.
    """
    registrar_name = registrar_type.__name__
    gate_logger = builder.logger.with_context(registrar=registrar_name)

    if not builder.services.markers.try_mark(registrar_type):
        gate_logger.debug(f"Duplicate request for '{registrar_name}' and will be skipped.")
        return RegistrationResult(builder, RegistrationOutcome.DUPLICATE)

    registrar = registrar_type()
    path = provider_config_path(registrar.provider_type, registrar.provider_name)
    section = builder.configuration.get_section(path)

    if not section.exists():
        if required:
            error = ConfigurationMissingError(registrar_name, path)
            gate_logger.error(error.message)
            return RegistrationResult(builder, RegistrationOutcome.FAILED, error)
        gate_logger.debug(f"No configuration settings found for '{registrar_name}' at '{path}'.")
        return RegistrationResult(builder, RegistrationOutcome.MISSING_CONFIGURATION)

    cause: Optional[ValidationError] = None
    try:
        settings = section.bind(registrar.settings_type)
    except ValidationError as e:
        settings, cause = None, e

    if settings is None:
        error = ConfigurationInvalidError(registrar_name, path, section.describe_children())
        error.__cause__ = cause
        gate_logger.error(error.message)
        return RegistrationResult(builder, RegistrationOutcome.FAILED, error)

    count = settings.instance_count
    if count == 0:
        gate_logger.warning(f"0 instances found to register for '{registrar_name}'.")
        return RegistrationResult(builder, RegistrationOutcome.NO_INSTANCES)

    registrar.register(settings, builder.services, builder.configuration)
    gate_logger.debug(
        f"Registered {count} provider instances for '{registrar_name}' "
        f"of type '{registrar.provider_type}'."
    )
    return RegistrationResult(builder, RegistrationOutcome.REGISTERED, instance_count=count)


def register_service_provider(
    builder: "HostApplicationBuilder",
    registrar_type: Type[ServiceProviderRegistrar],
    *,
    required: bool = False,
) -> "HostApplicationBuilder":
    """Raising variant of ``try_register_service_provider``.

    Deferred startup logs are flushed before raising, so the failure is logged
    even though the builder is never built.

    Returns:
        The builder, for chaining.

    Raises:
        ConfigurationMissingError: ``required`` and the section is absent.
        ConfigurationInvalidError: The section does not bind to the settings type.
    """
    result = try_register_service_provider(builder, registrar_type, required=required)
    if result.error is not None:
        builder.logger.flush()
        raise result.error
    return builder
