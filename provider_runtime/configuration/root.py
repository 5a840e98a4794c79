"""Configuration root and sections.

The root merges its providers (later ones win, key by key) into one flat,
case-insensitive view. Sections are lightweight windows onto a path of that
view; asking for a path that holds nothing still returns a section, whose
``exists()`` is False.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel

from provider_runtime.configuration.binding import match_field_keys
from provider_runtime.configuration.providers import (
    KEY_DELIMITER,
    ConfigurationProvider,
    combine_path,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _segment_sort_key(segment: str) -> Tuple[int, int, str]:
    """Numeric segments first (numerically), then the rest case-insensitively."""
    if segment.isdigit():
        return (0, int(segment), "")
    return (1, 0, segment.lower())


class _ConfigurationNode:
    """Shared lookup behaviour of the root and of sections."""

    _root: "ConfigurationRoot"
    path: str

    def get_section(self, key: str) -> "ConfigurationSection":
        """Return the section at *key*, relative to this node."""
        return ConfigurationSection(self._root, combine_path(self.path, key))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the raw value at *key* relative to this node, or *default*."""
        value = self._root._lookup(combine_path(self.path, key))
        return default if value is None else value

    def get_children(self) -> List["ConfigurationSection"]:
        """Return the immediate child sections, ordered by key."""
        return [
            ConfigurationSection(self._root, combine_path(self.path, segment))
            for segment in self._root._child_segments(self.path)
        ]

    def to_data(self) -> Any:
        """Return the subtree as nested dicts / lists with string leaves.

        A node whose child keys are exactly ``0..n-1`` becomes a list.
        """
        children = self.get_children()
        if not children:
            return self._root._lookup(self.path)

        keys = [child.key for child in children]
        data = {child.key: child.to_data() for child in children}
        if keys == [str(index) for index in range(len(keys))]:
            return [data[key] for key in keys]
        return data


class ConfigurationSection(_ConfigurationNode):
    """A view onto one path of a ``ConfigurationRoot``."""

    def __init__(self, root: "ConfigurationRoot", path: str) -> None:
        """Create a section for *path*; nothing is looked up until used."""
        self._root = root
        self.path = path

    def __repr__(self) -> str:
        return f"ConfigurationSection(path={self.path!r})"

    @property
    def key(self) -> str:
        """The last segment of the path."""
        return self.path.rsplit(KEY_DELIMITER, 1)[-1]

    @property
    def value(self) -> Optional[str]:
        """The raw value stored at this exact path, if any."""
        return self._root._lookup(self.path)

    def exists(self) -> bool:
        """Whether the section holds a value or has any children."""
        return self.value is not None or bool(self._root._child_segments(self.path))

    def bind(self, model_type: Type[ModelT]) -> Optional[ModelT]:
        """Bind the subtree to *model_type*.

        Returns:
            The validated model, or None when the section has no children
            (absent, or a bare scalar that cannot populate a model).

        Raises:
            pydantic.ValidationError: If the subtree does not fit the model.

        Top-level keys are matched to fields ignoring case; nested models bind
        case-insensitively when they derive from ``ConfigurationModel``.
        """
        data = self.to_data()
        if not isinstance(data, dict):
            return None
        return model_type.model_validate(match_field_keys(model_type, data))

    def describe_children(self) -> List[str]:
        """List children as ``key=value``, or ``key=[section]`` for nested ones."""
        described = []
        for child in self.get_children():
            value = child.value
            described.append(f"{child.key}={value if value is not None else '[section]'}")
        return described


class ConfigurationRoot(_ConfigurationNode):
    """Merged, case-insensitive view over a sequence of providers."""

    def __init__(self, providers: Sequence[ConfigurationProvider]) -> None:
        """Load every provider in order; later providers override earlier ones."""
        self._root = self
        self.path = ""
        self.providers = list(providers)
        self._data: Dict[str, Tuple[str, str]] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read all providers."""
        data: Dict[str, Tuple[str, str]] = {}
        for provider in self.providers:
            for path, value in provider.load().items():
                data[path.lower()] = (path, value)
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def items(self) -> Iterable[Tuple[str, str]]:
        """Iterate over ``(path, value)`` pairs in original key casing."""
        return iter(self._data.values())

    def _lookup(self, path: str) -> Optional[str]:
        entry = self._data.get(path.lower())
        return None if entry is None else entry[1]

    def _child_segments(self, path: str) -> List[str]:
        depth = path.count(KEY_DELIMITER) + 1 if path else 0
        prefix = f"{path.lower()}{KEY_DELIMITER}" if path else ""

        segments: Dict[str, str] = {}
        for lowered, (original, _) in self._data.items():
            if not lowered.startswith(prefix):
                continue
            segment = original.split(KEY_DELIMITER)[depth]
            segments.setdefault(segment.lower(), segment)

        return sorted(segments.values(), key=_segment_sort_key)
