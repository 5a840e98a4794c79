"""Unit tests for provider settings shapes and the registrar base class."""

import pytest
from pydantic import ValidationError

from provider_runtime.providers import (
    ServiceProviderHealthCheckOptions,
    ServiceProviderInstanceSettings,
    ServiceProviderSettings,
)
from provider_runtime.providers.fakes import (
    FakeClient,
    FakeHealthOptions,
    FakeInstanceSettings,
    FakeSettings,
    make_fake_registrar,
)
from provider_runtime.services import ServiceCollection


class TestSettingsBinding:
    """Settings accept PascalCase and snake_case keys in any letter case."""

    def test_pascal_case(self):
        settings = FakeSettings.model_validate(
            {
                "Instances": {
                    "a": {
                        "ConnectionString": "Server=a",
                        "HealthChecks": {"TimeoutSeconds": "2", "Tags": ["db"]},
                    }
                }
            }
        )

        instance = settings.instances["a"]
        assert instance.connection_string == "Server=a"
        assert isinstance(instance.health_checks, FakeHealthOptions)
        assert instance.health_checks.timeout_seconds == 2.0
        assert instance.health_checks.tags == ["db"]

    def test_snake_case(self):
        settings = FakeSettings.model_validate({"instances": {"a": {"connection_string": "x"}}})

        assert settings.instances["a"].connection_string == "x"
        assert settings.instance_count == 1

    def test_any_letter_case(self):
        settings = FakeSettings.model_validate(
            {"INSTANCES": {"a": {"CONNECTIONSTRING": "x", "healthchecks": {"TAGS": ["db"]}}}}
        )

        instance = settings.instances["a"]
        assert instance.connection_string == "x"
        assert instance.health_checks.tags == ["db"]

    def test_unknown_keys_ignored(self):
        settings = FakeSettings.model_validate({"Instances": {}, "Whatever": "1"})

        assert settings.instance_count == 0

    def test_defaults(self):
        options = ServiceProviderHealthCheckOptions()

        assert options.enabled is True
        assert options.timeout_seconds == 5.0
        assert ServiceProviderInstanceSettings().health_checks is None
        assert ServiceProviderSettings().instances == {}

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ServiceProviderHealthCheckOptions(timeout_seconds=0)


class TestRegistrarRegister:
    """Default ``register`` behaviour."""

    def _settings(self):
        return FakeSettings(
            instances={
                "zeta": FakeInstanceSettings(name="custom"),
                "alpha": FakeInstanceSettings(),
            }
        )

    def test_registers_settings_and_instances(self, make_configuration):
        registrar_type = make_fake_registrar()
        services = ServiceCollection()
        settings = self._settings()

        registrar_type().register(settings, services, make_configuration({}))

        keys = [d.key for d in services if d.service is FakeClient]
        assert keys == ["alpha", "zeta"]
        assert services.build_provider().resolve(FakeSettings) is settings

    def test_fills_name_and_health_defaults(self, make_configuration):
        settings = self._settings()

        make_fake_registrar()().register(settings, ServiceCollection(), make_configuration({}))

        assert settings.instances["alpha"].name == "alpha"
        assert settings.instances["zeta"].name == "custom"
        assert isinstance(settings.instances["alpha"].health_checks, FakeHealthOptions)

    def test_config_path_and_instance_section(self, make_configuration):
        registrar = make_fake_registrar("Messaging", "Bus")()
        configuration = make_configuration(
            {"Cirreum": {"Messaging": {"Providers": {"Bus": {"Instances": {"a": {"Extra": "1"}}}}}}}
        )

        assert registrar.config_path == "Cirreum:Messaging:Providers:Bus"
        assert registrar.instance_section(configuration, "a").get("Extra") == "1"
