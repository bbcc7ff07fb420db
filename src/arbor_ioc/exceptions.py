"""Exception hierarchy for arbor-ioc.

All engine exceptions inherit from :class:`DIError`, making it easy to
catch any resolution failure with a single ``except DIError`` clause.
"""

from typing import Any, Iterable


def _name(token: Any) -> str:
    return getattr(token, "__name__", str(token))


class DIError(Exception):
    """Base exception and generic dependency-injection failure."""

    pass


class DependencyNotFoundError(DIError):
    """Raised when a required dependency cannot be resolved in any scope.

    Attributes:
        token: The dependency token that was not found.
    """

    def __init__(self, token: Any):
        super().__init__(f"Dependency [{_name(token)}] cannot be resolved")
        self.token = token


class ProviderResolutionError(DIError):
    """Raised when a provider itself cannot be resolved.

    This covers class providers whose class is registered neither as a module
    nor as a module factory, and existing (alias) providers whose target is
    missing.

    Attributes:
        token: The provider token.
    """

    def __init__(self, token: Any, msg: str | None = None):
        super().__init__(msg or f"Provider [{_name(token)}] cannot be resolved")
        self.token = token


class SpreadError(DIError):
    """Raised when a spread dependency does not resolve to a mapping."""

    def __init__(self, token: Any):
        super().__init__(f"Provider [{_name(token)}] cannot be spread")
        self.token = token


class InvalidProviderError(DIError):
    """Raised for malformed provider metadata.

    Attributes:
        meta: The offending metadata record.
    """

    def __init__(self, meta: Any, reason: str = "Expected valid provider"):
        super().__init__(f"{reason}: {meta!r}")
        self.meta = meta


class CircularDependencyError(DIError):
    """Raised when a token already in flight is entered again.

    Attributes:
        chain: Tokens currently pending, in the order they were entered.
        token: The token whose re-entry closed the cycle.
    """

    def __init__(self, chain: Iterable[Any], token: Any):
        self.chain = tuple(chain)
        self.token = token
        path = " -> ".join(_name(k) for k in self.chain + (token,))
        super().__init__(f"Circular dependency detected: {path}")


class ConfigurationError(DIError):
    """Raised for invalid settings or configuration sources that cannot be read."""

    def __init__(self, msg: str):
        super().__init__(msg)
