"""Service registration: the punq-backed collection and registration markers."""

from provider_runtime.services.collection import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
)
from provider_runtime.services.markers import RegistrationMarkers

__all__ = ["RegistrationMarkers", "ServiceCollection", "ServiceDescriptor", "ServiceLifetime"]
