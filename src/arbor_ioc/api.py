from typing import Any, Optional

from .config import ContextConfig, InjectorSettings, load_settings
from .injector import Injector
from .pending import PendingRecord


def bootstrap(
    root_class: type,
    parent: Optional[Injector] = None,
    *,
    settings: Optional[InjectorSettings] = None,
    config: Optional[ContextConfig] = None,
    pending: Optional[PendingRecord] = None,
) -> Any:
    """Bootstrap *root_class* and return the constructed root instance.

    Settings come from *settings* when given, otherwise from *config* (see
    :func:`~arbor_ioc.config.load_settings`), otherwise from the parent
    injector or the defaults.
    """
    if settings is None and config is not None:
        settings = load_settings(config)
    return Injector.bootstrap(root_class, parent, settings=settings, pending=pending)


def reset() -> None:
    """Clear process-wide engine state (pending record and class registries)."""
    Injector.reset()
