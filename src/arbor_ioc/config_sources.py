"""Configuration sources for engine settings.

Flat sources answer single-key lookups (:class:`EnvSource`,
:class:`FlatDictSource`); tree sources return a nested mapping
(:class:`DictSource`, :class:`JsonTreeSource`, :class:`YamlTreeSource`).
"""

import json
import os
from typing import Any, Callable, Mapping, Optional

from .exceptions import ConfigurationError


class FlatSource:
    """Base class for key-value sources. ``get`` returns ``None`` for unknown keys."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError


class EnvSource(FlatSource):
    """Flat source backed by ``os.environ``.

    Args:
        prefix: Prepended to every key (``ARBOR_`` turns ``NAMING`` into
            ``ARBOR_NAMING``).
        environ: Mapping to read instead of the process environment.
    """

    def __init__(self, prefix: str = "ARBOR_", environ: Optional[Mapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = environ

    def get(self, key: str) -> Optional[str]:
        env = os.environ if self._environ is None else self._environ
        return env.get(self.prefix + key)


class FlatDictSource(FlatSource):
    """Flat source backed by an in-memory dictionary.

    Only scalar values are visible; they are returned as strings.
    """

    def __init__(self, data: Mapping[str, Any], prefix: str = "", case_sensitive: bool = True):
        norm = (lambda s: s) if case_sensitive else str.upper
        self._norm = norm
        self._prefix = norm(prefix)
        self._data = {norm(str(k)): v for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        if not key:
            return None
        v = self._data.get(self._prefix + self._norm(key))
        if isinstance(v, (str, int, float, bool)):
            return str(v)
        return None


class TreeSource:
    """Base class for tree-structured sources."""

    def get_tree(self) -> Mapping[str, Any]:
        raise NotImplementedError


class DictSource(TreeSource):
    """Tree source backed by an in-memory nested mapping.

    Example:
        >>> DictSource({"arbor": {"naming": "camel"}}).get_tree()["arbor"]["naming"]
        'camel'
    """

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def get_tree(self) -> Mapping[str, Any]:
        return self._data


def _load_file(path: str, loader: Callable[[Any], Any], label: str) -> Mapping[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = loader(f)
    except Exception as e:
        raise ConfigurationError(f"Failed to load {label} config from {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"{label} config in {path} must be a mapping, got {type(data).__name__}")
    return data


class JsonTreeSource(TreeSource):
    """Tree source reading a JSON file on every :meth:`get_tree` call."""

    def __init__(self, path: str):
        self._path = path

    def get_tree(self) -> Mapping[str, Any]:
        return _load_file(self._path, json.load, "JSON")


class YamlTreeSource(TreeSource):
    """Tree source reading a YAML file.

    Requires ``PyYAML`` (``pip install arbor-ioc[yaml]``).

    Raises:
        ConfigurationError: If PyYAML is not installed or the file cannot
            be parsed.
    """

    def __init__(self, path: str):
        self._path = path

    def get_tree(self) -> Mapping[str, Any]:
        try:
            import yaml
        except ImportError as e:
            raise ConfigurationError("PyYAML not installed") from e
        return _load_file(self._path, yaml.safe_load, "YAML")
