# arbor_ioc/decorators.py
from __future__ import annotations

from typing import Any, Iterable, Optional

from .metadata import normalize_provider_meta
from .providers import normalize_dependencies
from .registry import module_registry, pin_class_kinds, provider_registry


def module(cls=None, *, deps: Optional[Iterable[Any]] = None):
    """Register a class as an injectable module.

    ``deps`` entries may be bare tokens, :class:`~arbor_ioc.providers.Dependency`
    objects or ``{"dep": ..., "optional": ..., "spread": ...}`` mappings.
    """
    def dec(c):
        module_registry.register(c, normalize_dependencies(deps))
        return c
    return dec(cls) if cls else dec


def module_factory(cls=None, *, providers: Optional[Iterable[Any]] = None):
    """Register a class as a composition root declaring ``providers``.

    Class providers are classified (module, module factory or unregistered)
    right here, against the registries as they stand when the decorator runs.
    """
    def dec(c):
        metas = tuple(normalize_provider_meta(p) for p in (providers or ()))
        provider_registry.register(c, pin_class_kinds(metas))
        return c
    return dec(cls) if cls else dec


__all__ = ["module", "module_factory"]
