"""Unit tests for contextual and deferred logging."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from provider_runtime.core.config import RuntimeSettings
from provider_runtime.core.logging import (
    ROOT_LOGGER_NAME,
    ContextualLogger,
    DeferredLogger,
    JsonFormatter,
    LoggerConfigurator,
    TextFormatter,
)


def _record(message="hello", **dimensions):
    record = logging.LogRecord(
        "provider_runtime.test", logging.INFO, __file__, 1, message, (), None
    )
    record.dimensions = dimensions
    return record


@pytest.fixture
def test_logger(runtime_caplog):
    return LoggerConfigurator.configure_logger("provider_runtime.test")


class TestContextualLogger:
    """Prefixes and dimensions."""

    def test_prefix_and_dimensions(self, test_logger, runtime_caplog):
        test_logger.with_prefix("Gate: ").with_context(registrar="Sql").info("ready")

        record = runtime_caplog.records[-1]
        assert record.getMessage() == "Gate: ready"
        assert record.dimensions == {"registrar": "Sql"}

    def test_derived_loggers_do_not_mutate(self, test_logger):
        derived = test_logger.with_prefix("A: ").with_context(x=1)

        assert test_logger.prefix == ""
        assert test_logger.dimensions == {}
        assert derived.with_context(y=2).dimensions == {"x": 1, "y": 2}
        assert derived.with_prefix("B: ").prefix == "A: B: "

    def test_context_overrides(self, test_logger):
        assert test_logger.with_context(x=1).with_context(x=2).dimensions == {"x": 2}

    def test_configure_logger_dimensions(self):
        configured = LoggerConfigurator.configure_logger("x.y", prefix="P ", dimensions={"a": 1})

        assert isinstance(configured, ContextualLogger)
        assert configured.logger.name == "x.y"
        assert configured.prefix == "P "
        assert configured.dimensions == {"a": 1}


class TestFormatters:
    """Text and JSON output."""

    def test_text_appends_dimensions(self):
        line = TextFormatter().format(_record(registrar="Sql", component="gate"))

        assert line.endswith("hello [registrar=Sql component=gate]")
        assert "INFO" in line

    def test_text_without_dimensions(self):
        assert TextFormatter().format(_record()).endswith("provider_runtime.test: hello")

    def test_json(self):
        payload = json.loads(JsonFormatter().format(_record(registrar="Sql")))

        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "provider_runtime.test"
        assert payload["registrar"] == "Sql"


class TestSetup:
    """Handler installation."""

    def test_installs_single_handler(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        previous_level = root.level
        try:
            LoggerConfigurator.setup(RuntimeSettings(LOG_FORMAT="json", LOG_LEVEL="warning"))
            LoggerConfigurator.setup(RuntimeSettings(LOG_FORMAT="text", LOG_LEVEL="error"))

            installed = [h for h in root.handlers if h is LoggerConfigurator._handler]
            assert len(installed) == 1
            assert isinstance(installed[0].formatter, TextFormatter)
            assert root.level == logging.ERROR
        finally:
            root.removeHandler(LoggerConfigurator._handler)
            LoggerConfigurator._handler = None
            root.setLevel(previous_level)

    def test_debug_overrides_level(self):
        settings = RuntimeSettings(DEBUG=True, LOG_LEVEL="ERROR")

        assert settings.effective_log_level == "DEBUG"


class TestDeferredLogger:
    """Buffering until flush."""

    def test_buffers_until_flush(self, test_logger, runtime_caplog):
        deferred = DeferredLogger(test_logger)
        deferred.with_context(registrar="A").debug("first")
        deferred.warning("second")

        assert deferred.pending == 2
        assert not [r for r in runtime_caplog.records if r.name == "provider_runtime.test"]

        assert deferred.flush() == 2

        records = [r for r in runtime_caplog.records if r.name == "provider_runtime.test"]
        assert [r.getMessage() for r in records] == ["first", "second"]
        assert [r.levelno for r in records] == [logging.DEBUG, logging.WARNING]
        assert records[0].dimensions == {"registrar": "A"}
        assert deferred.flushed
        assert deferred.pending == 0

    def test_writes_through_after_flush(self, test_logger, runtime_caplog):
        deferred = DeferredLogger(test_logger)
        deferred.flush()

        deferred.error("late")

        assert runtime_caplog.records[-1].getMessage() == "late"
        assert deferred.flush() == 0

    def test_views_share_buffer(self, test_logger):
        deferred = DeferredLogger(test_logger)
        view = deferred.with_context(x=1)
        view.info("one")

        assert deferred.pending == 1
        view.flush()
        assert deferred.flushed

    def test_pending_counts_concurrent_writes(self, test_logger):
        deferred = DeferredLogger(test_logger)
        counts = []

        def _log(index):
            deferred.with_context(worker=index).debug(f"entry {index}")
            counts.append(deferred.pending)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(_log, range(64)))

        assert deferred.pending == 64
        assert all(1 <= count <= 64 for count in counts)
        assert deferred.flush() == 64
        assert deferred.pending == 0
