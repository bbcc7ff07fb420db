"""Class registries for modules and module factories.

``module_registry`` maps a module class to its own declared dependency list;
``provider_registry`` maps a module-factory class to its own declared
provider metadata. The ``resolve_inherited_*`` functions merge those
declarations along the class MRO so subclasses can add to or override what
their ancestors declare.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from .metadata import MetaKind, ProviderMeta
from .providers import ClassKind, Dependency

_logger = logging.getLogger(__name__)


class ClassRegistry:
    """Simple class-to-declarations registry.

    Registering a class again replaces its previous declarations.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: Dict[type, Tuple[Any, ...]] = {}

    def register(self, cls: type, entries: Iterable[Any] = ()) -> None:
        if cls in self._entries:
            _logger.debug("Replacing %s declaration of %s", self.name, cls.__name__)
        self._entries[cls] = tuple(entries)

    def has(self, cls: Any) -> bool:
        try:
            return cls in self._entries
        except TypeError:
            return False

    def get(self, cls: type) -> Tuple[Any, ...]:
        return self._entries.get(cls, ())

    def reset(self) -> None:
        self._entries.clear()

    def __contains__(self, cls: Any) -> bool:
        return self.has(cls)

    def __len__(self) -> int:
        return len(self._entries)


module_registry = ClassRegistry("module")
provider_registry = ClassRegistry("module_factory")


def classify(cls: Any) -> ClassKind:
    """Classify *cls* against the current registry contents."""
    if module_registry.has(cls):
        return ClassKind.MODULE
    if provider_registry.has(cls):
        return ClassKind.MODULE_FACTORY
    return ClassKind.UNREGISTERED


def pin_class_kinds(metas: Iterable[ProviderMeta]) -> Tuple[ProviderMeta, ...]:
    """Stamp every class provider in *metas* with its current :class:`ClassKind`."""
    out: List[ProviderMeta] = []
    for meta in metas:
        if meta.kind is MetaKind.CLASS and meta.class_kind is None:
            meta = meta.with_class_kind(classify(meta.payload))
        out.append(meta)
    return tuple(out)


def _lineage(cls: type, registry: ClassRegistry) -> List[type]:
    mro = getattr(cls, "__mro__", (cls,))
    return [c for c in reversed(mro) if registry.has(c)]


def resolve_inherited_module_factory(cls: type) -> Tuple[ProviderMeta, ...]:
    """Provider metadata of *cls* merged with its ancestors', subclass entries winning by token."""
    merged: Dict[Any, ProviderMeta] = {}
    for c in _lineage(cls, provider_registry):
        for meta in provider_registry.get(c):
            merged[meta.provide] = meta
    return tuple(merged.values())


def resolve_inherited_dependencies(cls: type) -> Tuple[Dependency, ...]:
    """Dependency list of *cls* merged with its ancestors', subclass entries winning by token."""
    merged: Dict[Any, Dependency] = {}
    for c in _lineage(cls, module_registry):
        for d in module_registry.get(c):
            merged[d.dep] = d
    return tuple(merged.values())


def reset() -> None:
    module_registry.reset()
    provider_registry.reset()
