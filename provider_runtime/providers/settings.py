"""Settings shapes that provider configuration sections bind into.

Concrete providers subclass these with their own fields. Keys may be written
PascalCase (``Instances``, ``ConnectionString``) as in JSON app settings, or
snake_case, in any letter case; unknown keys are ignored.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import Field

from provider_runtime.configuration.binding import ConfigurationModel


class ServiceProviderHealthCheckOptions(ConfigurationModel):
    """Health-check options for one provider instance.

    What the options mean is up to the provider that consumes them.
    """

    enabled: bool = True
    timeout_seconds: float = Field(5.0, gt=0)
    tags: List[str] = Field(default_factory=list)


HealthT = TypeVar("HealthT", bound=ServiceProviderHealthCheckOptions)


class ServiceProviderInstanceSettings(ConfigurationModel, Generic[HealthT]):
    """Settings for one configured instance of a provider.

    ``name`` defaults to the instance key and ``health_checks`` to the
    registrar's default options; both are filled in at registration time.
    """

    name: Optional[str] = None
    connection_string: Optional[str] = None
    health_checks: Optional[HealthT] = None


InstanceT = TypeVar("InstanceT", bound=ServiceProviderInstanceSettings)


class ServiceProviderSettings(ConfigurationModel, Generic[InstanceT]):
    """Settings for a provider: its configured instances, keyed by instance name."""

    instances: Dict[str, InstanceT] = Field(default_factory=dict)

    @property
    def instance_count(self) -> int:
        """Number of configured instances."""
        return len(self.instances)
