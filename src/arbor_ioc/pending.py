"""Pending record used for cycle detection during one resolution chain."""

from typing import Any, Dict, Iterator, Tuple


class PendingRecord:
    """Insertion-ordered set of tokens currently being resolved.

    A token enters the record right before its own dependencies are resolved
    and leaves it once its instance is committed. Re-entering a token that is
    still present is a cycle.
    """

    __slots__ = ("_tokens",)

    def __init__(self) -> None:
        self._tokens: Dict[Any, None] = {}

    def add(self, token: Any) -> None:
        self._tokens[token] = None

    def discard(self, token: Any) -> None:
        self._tokens.pop(token, None)

    def clear(self) -> None:
        self._tokens.clear()

    def chain(self) -> Tuple[Any, ...]:
        return tuple(self._tokens)

    def __contains__(self, token: Any) -> bool:
        try:
            return token in self._tokens
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"PendingRecord({list(self._tokens)!r})"
