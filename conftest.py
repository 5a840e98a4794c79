"""Root conftest for pytest configuration and shared fixtures.

Loaded before both testpaths (tests/ and provider_runtime/), so its fixtures
are available to centralized tests and colocated package tests alike.
"""

import logging
import os

import pytest

# ---------------------------------------------------------------------------
# Environment variables — must be set before any provider_runtime import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Builders and configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def runtime_settings():
    """Runtime settings that never read JSON files or host env vars."""
    from provider_runtime.core.config import RuntimeSettings

    return RuntimeSettings(
        ENVIRONMENT="test", LOG_LEVEL="DEBUG", CONFIG_JSON_FILES="", CONFIG_ENV_PREFIX=""
    )


@pytest.fixture
def make_configuration():
    """Factory: nested mapping -> ConfigurationRoot."""
    from provider_runtime.configuration import ConfigurationBuilder

    def _make(data=None):
        return ConfigurationBuilder().add_in_memory(data or {}).build()

    return _make


@pytest.fixture
def make_builder(make_configuration, runtime_settings):
    """Factory: nested mapping -> HostApplicationBuilder over that configuration only."""
    from provider_runtime.hosting import HostApplicationBuilder

    def _make(data=None):
        return HostApplicationBuilder(
            configuration=make_configuration(data), settings=runtime_settings
        )

    return _make


@pytest.fixture
def fake_registrar():
    """Fresh FakeRegistrar subclass reading ``Cirreum:Fake:Providers:default``."""
    from provider_runtime.providers.fakes import make_fake_registrar

    return make_fake_registrar()


@pytest.fixture
def runtime_caplog(caplog):
    """caplog capturing DEBUG and up from the provider_runtime logger tree."""
    caplog.set_level(logging.DEBUG, logger="provider_runtime")
    return caplog


@pytest.fixture(autouse=True)
def _reset_runtime_logging():
    """Remove the handler a HostApplicationBuilder installs, and restore the level."""
    from provider_runtime.core.logging import ROOT_LOGGER_NAME, LoggerConfigurator

    root = logging.getLogger(ROOT_LOGGER_NAME)
    previous_level = root.level
    yield
    if LoggerConfigurator._handler is not None:
        root.removeHandler(LoggerConfigurator._handler)
        LoggerConfigurator._handler = None
    root.setLevel(previous_level)
