# src/arbor_ioc/container.py
from typing import Any, Dict, Iterator, Optional, Tuple

from .providers import Provider


def lookup(local: Dict[Any, Provider], parent: Optional["Container"], token: Any) -> Tuple[Optional[Provider], bool]:
    """Two-level lookup: the local map first, then the parent chain.

    Returns the provider (or ``None``) and whether it was found only through
    an ancestor.
    """
    if token in local:
        return local[token], False
    node = parent
    while node is not None:
        if token in node._providers:
            return node._providers[token], True
        node = node._parent
    return None, False


def promote(local: Dict[Any, Provider], token: Any, provider: Provider) -> None:
    local[token] = provider


class Container:
    """Token-to-provider store of one injector, with parent fallback.

    A provider found through an ancestor is copied into the local map on
    first access, so :meth:`local_has` then reports it as defined here.
    """

    def __init__(self, parent: Optional["Container"] = None) -> None:
        self._providers: Dict[Any, Provider] = {}
        self._parent = parent

    @property
    def parent(self) -> Optional["Container"]:
        return self._parent

    def set_parent(self, parent: Optional["Container"]) -> None:
        self._parent = parent

    def get(self, token: Any) -> Optional[Provider]:
        provider, inherited = lookup(self._providers, self._parent, token)
        if inherited:
            promote(self._providers, token, provider)
        return provider

    def has(self, token: Any) -> bool:
        return lookup(self._providers, self._parent, token)[0] is not None

    def local_has(self, token: Any) -> bool:
        return token in self._providers

    def set(self, token: Any, provider: Provider) -> None:
        self._providers[token] = provider

    def entries(self) -> Iterator[Tuple[Any, Provider]]:
        return iter(list(self._providers.items()))

    def __len__(self) -> int:
        return len(self._providers)
