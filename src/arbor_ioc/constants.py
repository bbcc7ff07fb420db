"""Constants used throughout the arbor-ioc engine.

This module defines the framework logger, the default argument-bag key for
the resolving injector, and the attribute names used by the assembly step.
"""

import logging

LOGGER_NAME: str = "arbor_ioc"
"""Default logger name for the arbor-ioc engine."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for arbor-ioc internal diagnostics."""

INJECTOR_KEY: str = "injector"
"""Argument-bag key under which every module receives its resolving injector."""

NAMING_SNAKE: str = "snake"
NAMING_CAMEL: str = "camel"
NAMING_NONE: str = "none"
NAMING_STYLES = (NAMING_SNAKE, NAMING_CAMEL, NAMING_NONE)

REDUCER_ATTR: str = "reducer"
"""Capability marker: a module exposing a callable ``reducer`` joins store composition."""

PROXY_REDUCER_ATTR: str = "proxy_reducer"
"""Capability marker for the secondary (proxy) state tree."""

ROOT_REDUCER_ATTR: str = "_reducer"
ROOT_PROXY_REDUCER_ATTR: str = "_proxy_reducer"
STATE_FUNC_ATTR: str = "_get_state"
PROXY_STATE_FUNC_ATTR: str = "_get_proxy_state"
ADD_MODULE_HOOK: str = "add_module"
LAST_ACTION_KEY: str = "last_action"
