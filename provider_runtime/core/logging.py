"""Logging for the provider runtime.

Thin layer over the standard library ``logging`` module:

- ``ContextualLogger`` carries a message prefix and a dict of dimensions that
  are attached to every record (``record.dimensions``).
- ``LoggerConfigurator`` builds contextual loggers and installs the handler.
- ``DeferredLogger`` buffers bootstrap-time messages until the host flushes
  them, so registration logs are not lost before handlers exist.

Usage:
    from provider_runtime.core.logging import logger

    registrar_logger = logger.with_prefix("Gate: ").with_context(registrar="SqlRegistrar")
    registrar_logger.debug("Duplicate request will be skipped.")
"""

import json
import logging
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from provider_runtime.core.config import RuntimeSettings

ROOT_LOGGER_NAME = "provider_runtime"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that carries a prefix and structured dimensions.

    ``with_prefix`` and ``with_context`` never mutate the adapter; they return
    a new one so a derived logger can be handed to collaborators safely.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Wrap *logger* with a prefix and dimensions."""
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Prepend the prefix and attach dimensions as ``record.dimensions``."""
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a logger whose messages start with *prefix* (appended to any existing one)."""
        return ContextualLogger(self.logger, f"{self.prefix}{prefix}", self.dimensions)

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a logger with *dimensions* merged over the current ones."""
        return ContextualLogger(self.logger, self.prefix, {**self.dimensions, **dimensions})


class TextFormatter(logging.Formatter):
    """Plain text formatter that appends dimensions as ``key=value`` pairs."""

    def __init__(self) -> None:
        """Use a fixed line layout."""
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        """Format the record and append its dimensions, if any."""
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if dimensions:
            pairs = " ".join(f"{key}={value}" for key, value in dimensions.items())
            line = f"{line} [{pairs}]"
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line, dimensions flattened into the object."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize the record as JSON."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "dimensions", None) or {})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LoggerConfigurator:
    """Factory for contextual loggers and the process log handler."""

    _handler: Optional[logging.Handler] = None

    @staticmethod
    def configure_logger(
        name: str,
        *,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> ContextualLogger:
        """Create a contextual logger for *name*.

        Args:
            name: Standard library logger name (dotted).
            prefix: Text prepended to every message.
            dimensions: Structured fields attached to every record.

        Returns:
            A ``ContextualLogger`` wrapping ``logging.getLogger(name)``.
        """
        return ContextualLogger(logging.getLogger(name), prefix, dimensions)

    @classmethod
    def setup(cls, settings: "RuntimeSettings") -> None:
        """Install the runtime log handler according to *settings*.

        Safe to call more than once; the previous handler is replaced.
        """
        from provider_runtime.core.config.enums import LogFormat

        root = logging.getLogger(ROOT_LOGGER_NAME)
        if cls._handler is not None:
            root.removeHandler(cls._handler)

        handler = logging.StreamHandler(sys.stderr)
        if settings.LOG_FORMAT == LogFormat.JSON:
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(TextFormatter())

        root.addHandler(handler)
        root.setLevel(settings.effective_log_level)
        cls._handler = handler


@dataclass
class _DeferredEntry:
    level: int
    message: str
    dimensions: Dict[str, Any]


@dataclass
class _DeferredBuffer:
    """Shared buffer behind a family of ``DeferredLogger`` views."""

    target: ContextualLogger
    entries: List[_DeferredEntry] = field(default_factory=list)
    flushed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock)

    def emit(self, level: int, message: str, dimensions: Dict[str, Any]) -> None:
        with self.lock:
            if not self.flushed:
                self.entries.append(_DeferredEntry(level, message, dimensions))
                return
        self._write(_DeferredEntry(level, message, dimensions))

    def flush(self) -> int:
        with self.lock:
            pending, self.entries = self.entries, []
            self.flushed = True
        for entry in pending:
            self._write(entry)
        return len(pending)

    def _write(self, entry: _DeferredEntry) -> None:
        self.target.with_context(**entry.dimensions).log(entry.level, entry.message)


class DeferredLogger:
    """Logger that holds messages until ``flush()`` and writes through afterwards.

    Views created with ``with_context`` share one buffer, so flushing any of
    them replays every buffered message in the order it was logged.
    """

    def __init__(
        self,
        target: ContextualLogger,
        *,
        dimensions: Optional[Dict[str, Any]] = None,
        _buffer: Optional[_DeferredBuffer] = None,
    ) -> None:
        """Buffer messages destined for *target*."""
        self._buffer = _buffer or _DeferredBuffer(target)
        self._dimensions: Dict[str, Any] = dict(dimensions or {})

    def with_context(self, **dimensions: Any) -> "DeferredLogger":
        """Return a view with *dimensions* merged over the current ones."""
        return DeferredLogger(
            self._buffer.target,
            dimensions={**self._dimensions, **dimensions},
            _buffer=self._buffer,
        )

    @property
    def pending(self) -> int:
        """Number of buffered messages not yet written."""
        with self._buffer.lock:
            return len(self._buffer.entries)

    @property
    def flushed(self) -> bool:
        """Whether the buffer has been flushed."""
        return self._buffer.flushed

    def log(self, level: int, message: str) -> None:
        """Buffer (or, once flushed, write) *message* at *level*."""
        self._buffer.emit(level, message, self._dimensions)

    def debug(self, message: str) -> None:
        self.log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self.log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self.log(logging.WARNING, message)

    def error(self, message: str) -> None:
        self.log(logging.ERROR, message)

    def flush(self) -> int:
        """Write all buffered messages to the target logger.

        Returns:
            The number of messages replayed.
        """
        return self._buffer.flush()


logger = LoggerConfigurator.configure_logger(ROOT_LOGGER_NAME)
