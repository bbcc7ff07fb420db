import re
from typing import Any

from .constants import NAMING_CAMEL, NAMING_NONE, NAMING_SNAKE, NAMING_STYLES
from .exceptions import ConfigurationError

_SEPARATORS = re.compile(r"[\s\-.]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _as_text(token: Any) -> str:
    if isinstance(token, str):
        return token
    return getattr(token, "__name__", str(token))


def _words(text: str) -> list:
    words = []
    for chunk in _SEPARATORS.split(text.replace("_", " ")):
        words.extend(w for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def snake_case(token: Any) -> str:
    return "_".join(w.lower() for w in _words(_as_text(token)))


def camel_case(token: Any) -> str:
    words = _words(_as_text(token))
    if not words:
        return ""
    head, *tail = words
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in tail)


def normalize_token(token: Any, style: str = NAMING_SNAKE) -> str:
    """Key used for *token* in argument bags and exported module bags."""
    if style == NAMING_SNAKE:
        return snake_case(token)
    if style == NAMING_CAMEL:
        return camel_case(token)
    if style == NAMING_NONE:
        return _as_text(token)
    raise ConfigurationError(f"Unknown naming style: {style!r}; allowed: {list(NAMING_STYLES)}")
