"""Engine settings and the configuration builder.

:func:`configuration` assembles flat and tree sources into an immutable
:class:`ContextConfig`; :func:`load_settings` reads :class:`InjectorSettings`
out of it.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from .config_sources import FlatSource, TreeSource
from .constants import INJECTOR_KEY, LOGGER, NAMING_SNAKE, NAMING_STYLES
from .exceptions import ConfigurationError

TREE_SECTION = "arbor"


@dataclass(frozen=True)
class ContextConfig:
    """Immutable bundle of configuration sources.

    Attributes:
        flat_sources: Key-value sources, first match wins.
        tree_sources: Nested sources, later sources override earlier ones.
        overrides: Values that take precedence over every source.
    """

    flat_sources: Tuple[FlatSource, ...] = ()
    tree_sources: Tuple[TreeSource, ...] = ()
    overrides: Mapping[str, Any] = field(default_factory=dict)


def configuration(*sources: Any, overrides: Optional[Dict[str, Any]] = None) -> ContextConfig:
    """Build a :class:`ContextConfig`, classifying each source as flat or tree.

    Raises:
        ConfigurationError: If a source is neither flat nor tree.

    Example:
        >>> cfg = configuration(EnvSource(), DictSource({"arbor": {"naming": "camel"}}))
    """
    flat = []
    tree = []
    for src in sources:
        if isinstance(src, FlatSource):
            flat.append(src)
        elif isinstance(src, TreeSource):
            tree.append(src)
        else:
            raise ConfigurationError(f"Unknown configuration source type: {type(src)}")
    return ContextConfig(tuple(flat), tuple(tree), dict(overrides or {}))


def _truthy(s: str) -> bool:
    return s.strip().lower() in {"1", "true", "yes", "on", "y", "t"}


def _falsy(s: str) -> bool:
    return s.strip().lower() in {"0", "false", "no", "off", "n", "f", ""}


def _coerce_bool(name: str, v: Any) -> bool:
    if isinstance(v, bool):
        return v
    s = str(v)
    if _truthy(s):
        return True
    if _falsy(s):
        return False
    raise ConfigurationError(f"Setting '{name}' expects a boolean, got {v!r}")


@dataclass(frozen=True)
class InjectorSettings:
    """Tunable behaviour of the resolution engine.

    Attributes:
        naming: How tokens become argument names (``snake``, ``camel``, ``none``).
        injector_key: Argument name under which modules receive their injector.
        isolate_pending: Give every top-level bootstrap its own pending record
            instead of the process-wide one.
        log_level: Optional level name applied to the ``arbor_ioc`` logger.
    """

    naming: str = NAMING_SNAKE
    injector_key: str = INJECTOR_KEY
    isolate_pending: bool = False
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.naming not in NAMING_STYLES:
            raise ConfigurationError(f"Unknown naming style: {self.naming!r}; allowed: {list(NAMING_STYLES)}")
        if not self.injector_key or not str(self.injector_key).isidentifier():
            raise ConfigurationError(f"injector_key must be a valid identifier, got {self.injector_key!r}")
        if self.log_level is not None and not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")

    def apply_logging(self) -> None:
        if self.log_level is not None:
            LOGGER.setLevel(str(self.log_level).upper())


def _tree_section(config: ContextConfig) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for src in config.tree_sources:
        section = src.get_tree().get(TREE_SECTION) or {}
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"Config section '{TREE_SECTION}' must be a mapping")
        merged.update(section)
    return merged


def _lookup(name: str, config: ContextConfig, tree: Mapping[str, Any]) -> Any:
    if name in config.overrides:
        return config.overrides[name]
    flat_key = name.upper()
    for src in config.flat_sources:
        v = src.get(flat_key)
        if v is not None:
            return v
    return tree.get(name)


def load_settings(config: Optional[ContextConfig] = None) -> InjectorSettings:
    """Resolve :class:`InjectorSettings` from *config*.

    Precedence: overrides, then flat sources (upper-case keys), then the
    ``arbor`` section of the tree sources, then defaults.

    Raises:
        ConfigurationError: On unreadable sources or invalid values.
    """
    if config is None:
        return InjectorSettings()
    tree = _tree_section(config)
    values: Dict[str, Any] = {}
    for f in fields(InjectorSettings):
        v = _lookup(f.name, config, tree)
        if v is None:
            continue
        values[f.name] = _coerce_bool(f.name, v) if f.type in (bool, "bool") else str(v)
    return InjectorSettings(**values)
