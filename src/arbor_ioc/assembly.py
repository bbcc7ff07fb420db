"""Composition of resolved modules into a bootstrapped root instance.

After the injector has built every exported module, :func:`assemble` hands
them to the root's ``add_module`` hook and combines the modules' reducers
into state-transition functions stored on the root.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from .constants import (
    ADD_MODULE_HOOK,
    LAST_ACTION_KEY,
    PROXY_REDUCER_ATTR,
    PROXY_STATE_FUNC_ATTR,
    REDUCER_ATTR,
    ROOT_PROXY_REDUCER_ATTR,
    ROOT_REDUCER_ATTR,
    STATE_FUNC_ATTR,
)

Reducer = Callable[[Any, Any], Any]


def combine_reducers(reducers: Mapping[str, Reducer]) -> Callable[[Optional[Dict[str, Any]], Any], Dict[str, Any]]:
    """Combine per-key reducers into one reducer over a dict-shaped state.

    Each reducer receives its previous sub-state (``None`` on first run) and
    the action. The previous state object is returned as-is when no
    sub-state changed identity.
    """
    items = tuple(reducers.items())

    def combined(state: Optional[Dict[str, Any]], action: Any) -> Dict[str, Any]:
        previous = state or {}
        changed = state is None
        next_state: Dict[str, Any] = {}
        for key, reducer in items:
            before = previous.get(key)
            after = reducer(before, action)
            next_state[key] = after
            changed = changed or after is not before
        return next_state if changed else state

    return combined


def _last_action(state: Any, action: Any) -> Any:
    return action


def _capability(module: Any, attr: str) -> Optional[Reducer]:
    fn = getattr(module, attr, None)
    return fn if callable(fn) else None


def assemble(root: Any, modules: Mapping[str, Any]) -> Any:
    """Register *modules* on *root* and wire store composition.

    Returns:
        The same *root*, for chaining.
    """
    add_module = getattr(root, ADD_MODULE_HOOK, None)
    reducers: Dict[str, Reducer] = {}
    proxy_reducers: Dict[str, Reducer] = {}

    for name, module in modules.items():
        if callable(add_module):
            add_module(name, module)

        reducer = _capability(module, REDUCER_ATTR)
        if reducer is not None:
            reducers[name] = reducer
            setattr(module, STATE_FUNC_ATTR, lambda name=name: root.state[name])

        proxy_reducer = _capability(module, PROXY_REDUCER_ATTR)
        if proxy_reducer is not None:
            proxy_reducers[name] = proxy_reducer
            setattr(module, PROXY_STATE_FUNC_ATTR, lambda name=name: root.proxy_state[name])

    if reducers:
        setattr(root, ROOT_REDUCER_ATTR, combine_reducers({**reducers, LAST_ACTION_KEY: _last_action}))
    if proxy_reducers:
        setattr(root, ROOT_PROXY_REDUCER_ATTR, combine_reducers(proxy_reducers))
    return root
