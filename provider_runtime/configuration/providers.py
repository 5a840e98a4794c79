"""Configuration providers.

Each provider loads a flat ``path -> value`` mapping where paths are
``:``-delimited (``"Cirreum:Persistence:Providers:Sql:Instances:default:Name"``).
Nested documents are flattened; lists flatten to ``0``, ``1``, ... segments.
"""

import json
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Union

from provider_runtime.core.exceptions import (
    ConfigurationFileError,
    ConfigurationFileNotFoundError,
)

KEY_DELIMITER = ":"
ENV_DELIMITER = "__"


def combine_path(*segments: str) -> str:
    """Join non-empty path segments with the key delimiter."""
    return KEY_DELIMITER.join(segment for segment in segments if segment)


def flatten(data: Any, prefix: str = "") -> Dict[str, str]:
    """Flatten a nested document into ``path -> str`` pairs.

    Empty mappings and lists contribute no keys. ``None`` becomes an empty
    string and booleans render as ``true``/``false``.
    """
    out: Dict[str, str] = {}
    _flatten_into(data, prefix, out)
    return out


def _flatten_into(data: Any, prefix: str, out: Dict[str, str]) -> None:
    if isinstance(data, Mapping):
        for key, value in data.items():
            _flatten_into(value, combine_path(prefix, str(key)), out)
    elif isinstance(data, (list, tuple)):
        for index, value in enumerate(data):
            _flatten_into(value, combine_path(prefix, str(index)), out)
    elif not prefix:
        raise ValueError("A scalar configuration value needs a key")
    elif data is None:
        out[prefix] = ""
    elif isinstance(data, bool):
        out[prefix] = "true" if data else "false"
    else:
        out[prefix] = str(data)


class ConfigurationProvider(ABC):
    """Source of flat configuration data."""

    @abstractmethod
    def load(self) -> Dict[str, str]:
        """Return the provider's data as flat ``path -> value`` pairs."""
        ...


class MemoryConfigurationProvider(ConfigurationProvider):
    """Provider over an in-memory (possibly nested) mapping."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        """Hold *data*; it is flattened on every ``load()``."""
        self._data = data

    def load(self) -> Dict[str, str]:
        """Flatten the mapping."""
        return flatten(self._data)


class JsonConfigurationProvider(ConfigurationProvider):
    """Provider over a JSON document on disk whose top level is an object."""

    def __init__(self, path: Union[str, Path], *, optional: bool = False) -> None:
        """Read *path* on load; a missing file is tolerated only when *optional*."""
        self.path = Path(path)
        self.optional = optional

    def load(self) -> Dict[str, str]:
        """Read, parse and flatten the file.

        Raises:
            ConfigurationFileNotFoundError: If the file is missing and not optional.
            ConfigurationFileError: If the file is not a JSON object.
        """
        if not self.path.is_file():
            if self.optional:
                return {}
            raise ConfigurationFileNotFoundError(str(self.path))

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationFileError(
                str(self.path), f"Could not parse '{self.path}': {e}"
            ) from e

        if not isinstance(document, dict):
            raise ConfigurationFileError(
                str(self.path), f"Top level of '{self.path}' must be a JSON object"
            )
        return flatten(document)


class EnvironmentVariablesConfigurationProvider(ConfigurationProvider):
    """Provider over environment variables.

    ``__`` in a variable name maps to the ``:`` delimiter, so
    ``Cirreum__Persistence__Providers__Sql__Instances__default__Name`` lands at
    ``Cirreum:Persistence:Providers:Sql:Instances:default:Name``. When a
    prefix is given, only matching variables are loaded and the prefix is
    stripped (matched case-insensitively).
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None) -> None:
        """Read from *environ* (defaults to ``os.environ`` at load time)."""
        self.prefix = prefix
        self._environ = environ

    def load(self) -> Dict[str, str]:
        """Collect matching variables."""
        environ = os.environ if self._environ is None else self._environ
        prefix = self.prefix.upper()
        out: Dict[str, str] = {}
        for name, value in environ.items():
            if prefix and not name.upper().startswith(prefix):
                continue
            key = name[len(prefix) :].replace(ENV_DELIMITER, KEY_DELIMITER)
            if key:
                out[key] = value
        return out
