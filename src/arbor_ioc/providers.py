"""Provider variants and dependency descriptors.

A provider is a declarative recipe for one named singleton. Four variants
exist: :class:`ValueProvider`, :class:`ClassProvider`,
:class:`FactoryProvider` and :class:`ExistingProvider`. Each carries a token
and an instance slot that is filled exactly once by the injector.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from .exceptions import DIError, InvalidProviderError

TokenT = Union[str, type, Any]


class ClassKind(Enum):
    """How a class provider's target is built, pinned when the provider is declared."""

    MODULE = "module"
    MODULE_FACTORY = "module_factory"
    UNREGISTERED = "unregistered"


@dataclass(frozen=True)
class Dependency:
    """One entry of a dependency list.

    Attributes:
        dep: The token to resolve.
        optional: Skip the entry silently when the token cannot be resolved.
        spread: Merge the resolved mapping into the argument bag instead of
            binding it under one name.
    """

    dep: TokenT
    optional: bool = False
    spread: bool = False


def dep(token: TokenT, *, optional: bool = False, spread: bool = False) -> Dependency:
    return Dependency(token, optional=optional, spread=spread)


def normalize_dependency(entry: Any) -> Dependency:
    if isinstance(entry, Dependency):
        return entry
    if isinstance(entry, Mapping):
        if "dep" not in entry:
            raise InvalidProviderError(entry, "Dependency descriptor without 'dep'")
        return Dependency(entry["dep"], optional=bool(entry.get("optional", False)), spread=bool(entry.get("spread", False)))
    return Dependency(entry)


def normalize_dependencies(entries: Optional[Iterable[Any]]) -> Tuple[Dependency, ...]:
    """Turn bare tokens and mappings into :class:`Dependency` objects."""
    return tuple(normalize_dependency(e) for e in (entries or ()))


_UNSET = object()


class Provider:
    """Base class for all provider variants."""

    def __init__(self, token: TokenT, private: bool = False) -> None:
        self.token = token
        self.private = bool(private)
        self._instance: Any = _UNSET

    @property
    def resolved(self) -> bool:
        return self._instance is not _UNSET

    def get_instance(self) -> Any:
        if self._instance is _UNSET:
            raise DIError(f"Provider [{self.token}] has not been resolved")
        return self._instance

    def set_instance(self, instance: Any) -> None:
        if self._instance is not _UNSET:
            raise DIError(f"Provider [{self.token}] is already resolved")
        self._instance = instance

    def __repr__(self) -> str:
        state = "set" if self.resolved else "unset"
        return f"{type(self).__name__}({self.token!r}, {state})"


class ValueProvider(Provider):
    def __init__(self, token: TokenT, value: Any, private: bool = False) -> None:
        super().__init__(token, private)
        self.value = value
        self._instance = value


class ClassProvider(Provider):
    def __init__(
        self,
        token: TokenT,
        klass: type,
        deps: Optional[Iterable[Any]] = None,
        private: bool = False,
        kind: ClassKind = ClassKind.MODULE,
    ) -> None:
        super().__init__(token, private)
        self.klass = klass
        self.deps = normalize_dependencies(deps)
        self.kind = kind


class FactoryProvider(Provider):
    def __init__(
        self,
        token: TokenT,
        func: Callable[..., Any],
        deps: Optional[Iterable[Any]] = None,
        private: bool = False,
    ) -> None:
        super().__init__(token, private)
        self.func = func
        self.deps = normalize_dependencies(deps)


class ExistingProvider(Provider):
    def __init__(self, token: TokenT, use_existing: TokenT, private: bool = False) -> None:
        super().__init__(token, private)
        self.use_existing = use_existing
