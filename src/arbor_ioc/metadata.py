"""Provider metadata records declared on module factories.

This module defines :class:`ProviderMeta` (the immutable declaration a module
factory carries for each provider), the ``use_*`` helpers used to build
those declarations, and :func:`normalize_provider_meta`, which also accepts
mapping-shaped records.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from .exceptions import InvalidProviderError
from .providers import (
    ClassKind,
    ClassProvider,
    Dependency,
    ExistingProvider,
    FactoryProvider,
    Provider,
    TokenT,
    ValueProvider,
    normalize_dependencies,
)


class MetaKind(Enum):
    VALUE = "use_value"
    CLASS = "use_class"
    EXISTING = "use_existing"
    FACTORY = "use_factory"


@dataclass(frozen=True)
class ProviderMeta:
    """Immutable descriptor for one declared provider.

    Attributes:
        provide: The token the provider is registered under.
        kind: Which provider variant to materialize.
        payload: The value, class, aliased token or factory function.
        deps: Declared dependencies, or ``None`` when a class provider should
            use the dependencies registered with its class.
        private: Keep the instance out of the exported module bag.
        class_kind: For class providers, whether the class is a module, a
            module factory or neither. Pinned at declaration time.
    """

    provide: TokenT
    kind: MetaKind
    payload: Any
    deps: Optional[Tuple[Dependency, ...]] = None
    private: bool = False
    class_kind: Optional[ClassKind] = None

    def with_class_kind(self, class_kind: ClassKind) -> "ProviderMeta":
        return replace(self, class_kind=class_kind)


def use_value(provide: TokenT, value: Any, *, private: bool = False) -> ProviderMeta:
    return ProviderMeta(provide, MetaKind.VALUE, value, private=private)


def use_class(provide: TokenT, klass: type, *, deps: Optional[Iterable[Any]] = None, private: bool = False) -> ProviderMeta:
    """Declare *klass* as the provider of *provide*.

    *deps* are merged over the dependencies registered with ``@module``:
    an entry for a token the class already declares replaces it in place,
    new tokens are appended.
    """
    if not isinstance(klass, type):
        raise InvalidProviderError(klass, "use_class expects a class")
    return ProviderMeta(
        provide,
        MetaKind.CLASS,
        klass,
        deps=normalize_dependencies(deps) if deps is not None else None,
        private=private,
    )


def use_existing(provide: TokenT, existing: TokenT, *, private: bool = False) -> ProviderMeta:
    return ProviderMeta(provide, MetaKind.EXISTING, existing, private=private)


def use_factory(provide: TokenT, func: Callable[..., Any], *, deps: Optional[Iterable[Any]] = None, private: bool = False) -> ProviderMeta:
    if not callable(func):
        raise InvalidProviderError(func, "use_factory expects a callable")
    return ProviderMeta(provide, MetaKind.FACTORY, func, deps=normalize_dependencies(deps), private=private)


def _from_mapping(record: Mapping[str, Any]) -> ProviderMeta:
    if "provide" not in record:
        raise InvalidProviderError(record)
    provide = record["provide"]
    private = bool(record.get("private", False))
    if "use_value" in record:
        return use_value(provide, record["use_value"], private=private)
    if "use_class" in record:
        return use_class(provide, record["use_class"], deps=record.get("deps"), private=private)
    if "use_existing" in record:
        return use_existing(provide, record["use_existing"], private=private)
    if "use_factory" in record:
        return use_factory(provide, record["use_factory"], deps=record.get("deps"), private=private)
    raise InvalidProviderError(record)


def normalize_provider_meta(record: Any) -> ProviderMeta:
    if isinstance(record, ProviderMeta):
        return record
    if isinstance(record, Mapping):
        return _from_mapping(record)
    raise InvalidProviderError(record)


def _merge_dependencies(base: Iterable[Any], overrides: Iterable[Any]) -> Tuple[Dependency, ...]:
    merged = {d.dep: d for d in normalize_dependencies(base)}
    for d in normalize_dependencies(overrides):
        merged[d.dep] = d
    return tuple(merged.values())


def materialize(meta: ProviderMeta, class_deps: Iterable[Any] = ()) -> Provider:
    """Build the provider variant described by *meta*.

    Args:
        meta: The declaration.
        class_deps: Dependencies registered with the class. Deps declared on
            a class provider are merged over them by token.
    """
    if meta.kind is MetaKind.VALUE:
        return ValueProvider(meta.provide, meta.payload, meta.private)
    if meta.kind is MetaKind.CLASS:
        deps = _merge_dependencies(class_deps, meta.deps or ())
        kind = meta.class_kind or ClassKind.UNREGISTERED
        return ClassProvider(meta.provide, meta.payload, deps, meta.private, kind)
    if meta.kind is MetaKind.EXISTING:
        return ExistingProvider(meta.provide, meta.payload, meta.private)
    if meta.kind is MetaKind.FACTORY:
        return FactoryProvider(meta.provide, meta.payload, meta.deps, meta.private)
    raise InvalidProviderError(meta)
