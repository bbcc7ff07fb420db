"""Named-argument bag handed to module constructors and factory functions."""

from collections.abc import Mapping
from typing import Any, Dict, Iterator

from .exceptions import SpreadError


class ArgumentBag(Mapping):
    """Ordered mapping of argument names to resolved instances.

    ``bind`` stores one instance under a name; ``spread`` merges every key of
    a resolved mapping, later merges overwriting earlier keys.
    """

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def bind(self, name: str, value: Any) -> None:
        self._items[name] = value

    def spread(self, token: Any, value: Any) -> None:
        if not isinstance(value, Mapping):
            raise SpreadError(token)
        for k, v in value.items():
            self._items[str(k)] = v

    def as_kwargs(self) -> Dict[str, Any]:
        return dict(self._items)

    def __getitem__(self, key: str) -> Any:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ArgumentBag({self._items!r})"
