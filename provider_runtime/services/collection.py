"""Service collection backed by a ``punq`` container.

Records a descriptor for every registration (so callers can inspect what was
registered) and forwards it to the underlying container. Factories receive
the container, letting them resolve their own dependencies:

    services.add_singleton("sql:default", factory=lambda c: Engine(c.resolve(Settings)))
"""

import inspect
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Iterator, List, Optional

from punq import Container, Scope

from provider_runtime.core.exceptions import ServiceRegistrationError
from provider_runtime.services.markers import RegistrationMarkers

_MISSING = object()

Factory = Callable[[Container], Any]


class ServiceLifetime(str, Enum):
    """How long a resolved service lives."""

    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceDescriptor:
    """One registration recorded by a ``ServiceCollection``."""

    service: Hashable
    lifetime: ServiceLifetime
    key: Optional[str] = None
    instance: Any = None
    factory: Optional[Factory] = None

    @property
    def service_key(self) -> Hashable:
        """The key the service is registered under in the container."""
        return self.service if self.key is None else (self.service, self.key)


class ServiceCollection:
    """Mutable, append-only set of service registrations."""

    def __init__(self) -> None:
        """Create an empty collection with its own container and markers."""
        self._container = Container()
        self._descriptors: List[ServiceDescriptor] = []
        self._built = False
        self._lock = threading.Lock()
        self.markers = RegistrationMarkers()

    # -- registration --------------------------------------------------------

    def add_singleton(
        self, service: Hashable, *, instance: Any = _MISSING, factory: Optional[Factory] = None
    ) -> "ServiceCollection":
        """Register *service* as a singleton (an instance, a factory, or the class itself)."""
        return self._add(ServiceLifetime.SINGLETON, service, None, instance, factory)

    def add_transient(
        self, service: Hashable, factory: Optional[Factory] = None
    ) -> "ServiceCollection":
        """Register *service* so every resolve builds a new object."""
        return self._add(ServiceLifetime.TRANSIENT, service, None, _MISSING, factory)

    def add_keyed_singleton(
        self,
        service: Hashable,
        key: str,
        *,
        instance: Any = _MISSING,
        factory: Optional[Factory] = None,
    ) -> "ServiceCollection":
        """Register a singleton of *service* under *key*.

        Keyed services resolve with ``container.resolve((service, key))``.
        """
        if instance is _MISSING and factory is None:
            raise ServiceRegistrationError(
                f"Keyed service {service!r}/{key!r} needs an instance or a factory"
            )
        return self._add(ServiceLifetime.SINGLETON, service, key, instance, factory)

    def _add(
        self,
        lifetime: ServiceLifetime,
        service: Hashable,
        key: Optional[str],
        instance: Any,
        factory: Optional[Factory],
    ) -> "ServiceCollection":
        if instance is not _MISSING and factory is not None:
            raise ServiceRegistrationError(
                f"Service {service!r} was given both an instance and a factory"
            )
        if instance is _MISSING and factory is None and not inspect.isclass(service):
            raise ServiceRegistrationError(
                f"Service {service!r} is not a class; provide an instance or a factory"
            )

        descriptor = ServiceDescriptor(
            service=service,
            lifetime=lifetime,
            key=key,
            instance=None if instance is _MISSING else instance,
            factory=factory,
        )

        with self._lock:
            if self._built:
                raise ServiceRegistrationError(
                    f"Cannot register {service!r}: the service provider has already been built"
                )
            self._register(descriptor, has_instance=instance is not _MISSING)
            self._descriptors.append(descriptor)
        return self

    def _register(self, descriptor: ServiceDescriptor, *, has_instance: bool) -> None:
        scope = (
            Scope.singleton
            if descriptor.lifetime == ServiceLifetime.SINGLETON
            else Scope.transient
        )
        container = self._container

        if has_instance:
            container.register(descriptor.service_key, instance=descriptor.instance)
        elif descriptor.factory is not None:
            factory = descriptor.factory
            container.register(
                descriptor.service_key, factory=lambda: factory(container), scope=scope
            )
        else:
            container.register(descriptor.service_key, scope=scope)

    # -- inspection ----------------------------------------------------------

    def contains(self, service: Hashable, key: Optional[str] = None) -> bool:
        """Whether *service* (optionally under *key*) has been registered."""
        return any(d.service == service and d.key == key for d in self._descriptors)

    def __contains__(self, service: Hashable) -> bool:
        return self.contains(service)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(list(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    # -- build ---------------------------------------------------------------

    @property
    def is_built(self) -> bool:
        """Whether ``build_provider`` has been called."""
        return self._built

    def build_provider(self) -> Container:
        """Freeze the collection and return the underlying container."""
        with self._lock:
            self._built = True
        return self._container
