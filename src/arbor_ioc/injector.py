# src/arbor_ioc/injector.py
from typing import Any, Dict, Iterable, Optional

from . import _state
from . import registry as _registry
from .arguments import ArgumentBag
from .assembly import assemble
from .config import InjectorSettings
from .constants import LOGGER
from .container import Container
from .exceptions import (
    CircularDependencyError,
    DependencyNotFoundError,
    DIError,
    ProviderResolutionError,
)
from .metadata import MetaKind, ProviderMeta, materialize
from .naming import normalize_token
from .pending import PendingRecord
from .providers import (
    ClassKind,
    ClassProvider,
    ExistingProvider,
    FactoryProvider,
    Provider,
    ValueProvider,
    normalize_dependencies,
)


def _name(token: Any) -> str:
    return getattr(token, "__name__", str(token))


class Injector:
    """One resolution scope in a tree of injectors.

    An injector owns a :class:`~arbor_ioc.container.Container`, the providers
    declared by the root class it was bootstrapped for (its *universal
    providers*) and an optional parent. Dependencies missing locally are
    looked up in the parent chain, and an ancestor resolves its own
    providers on behalf of descendants.
    """

    def __init__(self, settings: Optional[InjectorSettings] = None) -> None:
        self.target_class: Optional[type] = None
        self.parent_injector: Optional["Injector"] = None
        self.container = Container()
        self.universal_providers: Dict[Any, Provider] = {}
        self.settings = settings or InjectorSettings()
        self._pending: Optional[PendingRecord] = None

    def _pending_for(self, pending: Optional[PendingRecord]) -> PendingRecord:
        if pending is not None:
            return pending
        return _state.pending_or_default(self._pending)

    @staticmethod
    def _enter(token: Any, pending: PendingRecord) -> None:
        if token in pending:
            raise CircularDependencyError(pending.chain(), token)
        pending.add(token)

    def _commit(self, provider: Provider) -> Provider:
        self.container.set(provider.token, provider)
        LOGGER.debug("Resolved [%s] as %s in %s", _name(provider.token), type(provider).__name__, self)
        return provider

    def resolve_module_provider(self, provider: Provider, pending: Optional[PendingRecord] = None) -> Provider:
        """Resolve *provider* and its dependencies, committing it to this container.

        Resolution is idempotent: a token already visible through this
        container (locally or in an ancestor) returns the cached provider,
        which is then also stored locally.

        Raises:
            CircularDependencyError: If the provider is already in flight.
            ProviderResolutionError: If the provider cannot be built.
        """
        pending = self._pending_for(pending)
        if not isinstance(provider, Provider):
            raise DIError(f"Expected a valid provider, got {provider!r}")

        container = self.container
        # an ancestor hit is promoted into the local map by Container.get
        cached = container.get(provider.token)
        if cached is not None:
            LOGGER.debug("Reusing cached [%s] in %s", _name(provider.token), self)
            return cached

        if isinstance(provider, ExistingProvider):
            self._enter(provider.token, pending)
            try:
                target = self.resolve_dependency(provider.use_existing, pending)
                if target is None:
                    raise ProviderResolutionError(
                        provider.token, f"ExistingProvider [{_name(provider.use_existing)}] is not found"
                    )
                provider.set_instance(target.get_instance())
                return self._commit(provider)
            finally:
                pending.discard(provider.token)

        if isinstance(provider, ValueProvider):
            return self._commit(provider)

        if isinstance(provider, FactoryProvider):
            self._enter(provider.token, pending)
            try:
                deps = self.resolve_dependencies(provider.deps, pending)
                provider.set_instance(provider.func(**deps.as_kwargs()))
                return self._commit(provider)
            finally:
                pending.discard(provider.token)

        if isinstance(provider, ClassProvider):
            if provider.kind is ClassKind.MODULE:
                self._enter(provider.token, pending)
                try:
                    deps = self.resolve_dependencies(provider.deps, pending)
                    provider.set_instance(provider.klass(**deps.as_kwargs()))
                    return self._commit(provider)
                finally:
                    pending.discard(provider.token)
            if provider.kind is ClassKind.MODULE_FACTORY:
                return self.resolve_module_factory_provider(provider, pending)

        raise ProviderResolutionError(provider.token)

    def resolve_dependency(self, token: Any, pending: Optional[PendingRecord] = None) -> Optional[Provider]:
        """Find and resolve the provider for one dependency token.

        Looks in this container (and its ancestors), then in this injector's
        universal providers, then asks the parent injector. Returns ``None``
        when no scope can supply *token*.
        """
        pending = self._pending_for(pending)
        provider = self.container.get(token)
        if provider is not None:
            return provider
        if token in self.universal_providers:
            return self.resolve_module_provider(self.universal_providers[token], pending)
        if self.parent_injector is not None:
            return self.parent_injector.resolve_module_provider_for_children(token, pending)
        return None

    def resolve_dependencies(self, deps: Iterable[Any], pending: Optional[PendingRecord] = None) -> ArgumentBag:
        """Resolve a dependency list into an :class:`ArgumentBag`.

        Optional dependencies that cannot be resolved are left out. The bag
        always ends with this injector under ``settings.injector_key``.

        Raises:
            CircularDependencyError: If a dependency is already in flight.
            DependencyNotFoundError: If a required dependency cannot be resolved.
            SpreadError: If a spread dependency is not a mapping.
        """
        pending = self._pending_for(pending)
        bag = ArgumentBag()
        for d in normalize_dependencies(deps):
            if d.dep in pending:
                raise CircularDependencyError(pending.chain(), d.dep)
            provider = self.resolve_dependency(d.dep, pending)
            if provider is None:
                if d.optional:
                    continue
                raise DependencyNotFoundError(d.dep)
            instance = provider.get_instance()
            if d.spread:
                bag.spread(provider.token, instance)
            else:
                bag.bind(normalize_token(d.dep, self.settings.naming), instance)
        bag.bind(self.settings.injector_key, self)
        return bag

    def resolve_module_provider_for_children(self, token: Any, pending: Optional[PendingRecord] = None) -> Optional[Provider]:
        """Resolve one of this injector's universal providers for a descendant scope."""
        pending = self._pending_for(pending)
        if token in self.universal_providers:
            return self.resolve_module_provider(self.universal_providers[token], pending)
        if self.parent_injector is not None:
            return self.parent_injector.resolve_module_provider_for_children(token, pending)
        return None

    def _bootstrapping(self, klass: type) -> bool:
        node: Optional[Injector] = self
        while node is not None:
            if node.target_class is klass:
                return True
            node = node.parent_injector
        return False

    def resolve_module_factory_provider(self, provider: ClassProvider, pending: Optional[PendingRecord] = None) -> Provider:
        """Bootstrap a nested composition root in a child injector.

        Raises:
            CircularDependencyError: If the nested root's class is already
                being bootstrapped by this injector or one of its ancestors.
        """
        pending = self._pending_for(pending)
        cached = self.container.get(provider.token)
        if cached is not None:
            return cached
        self._enter(provider.token, pending)
        try:
            if self._bootstrapping(provider.klass):
                raise CircularDependencyError(pending.chain(), provider.klass)
            LOGGER.debug("Bootstrapping child injector for %s from %s", provider.klass.__name__, self)
            instance = Injector.bootstrap(provider.klass, self, pending=pending)
            provider.set_instance(instance)
            return self._commit(provider)
        finally:
            pending.discard(provider.token)

    @staticmethod
    def bootstrap(
        root_class: type,
        parent_injector: Optional["Injector"] = None,
        *,
        settings: Optional[InjectorSettings] = None,
        pending: Optional[PendingRecord] = None,
    ) -> Any:
        """Create an injector for *root_class*, resolve its providers and build the root.

        Args:
            root_class: The composition root class.
            parent_injector: Optional injector the new one falls back to.
            settings: Engine settings; defaults to the parent's settings.
            pending: Pending record to thread through resolution.

        Returns:
            The constructed root instance.
        """
        if settings is None:
            settings = parent_injector.settings if parent_injector is not None else InjectorSettings()
        injector = Injector(settings)
        injector.set_parent(parent_injector)
        if pending is None and parent_injector is not None:
            pending = parent_injector._pending
        if pending is None and parent_injector is None and settings.isolate_pending:
            with _state.isolated_pending() as record:
                return injector.build(root_class, record)
        return injector.build(root_class, pending)

    def _materialize(self, meta: ProviderMeta) -> Provider:
        class_deps = ()
        if meta.kind is MetaKind.CLASS:
            class_deps = _registry.resolve_inherited_dependencies(meta.payload)
        return materialize(meta, class_deps)

    def build(self, root_class: type, pending: Optional[PendingRecord] = None) -> Any:
        """Bootstrap *root_class* in this injector and return the root instance."""
        self.target_class = root_class
        self._pending = pending
        if self.parent_injector is None:
            self.settings.apply_logging()

        metas = _registry.pin_class_kinds(_registry.resolve_inherited_module_factory(root_class))
        for meta in metas:
            self.universal_providers[meta.provide] = self._materialize(meta)

        for provider in list(self.universal_providers.values()):
            if not self.container.local_has(provider.token):
                self.resolve_module_provider(provider, pending)

        modules = self.export()
        root = root_class(**modules)
        assemble(root, modules)
        LOGGER.info("Bootstrapped %s with %d module(s)", root_class.__name__, len(modules))
        return root

    def export(self) -> Dict[str, Any]:
        """Resolved non-private instances of this container, keyed by normalized token."""
        modules: Dict[str, Any] = {}
        for token, provider in self.container.entries():
            if not provider.private:
                modules[normalize_token(token, self.settings.naming)] = provider.get_instance()
        return modules

    def get(self, token: Any) -> Any:
        """Instance for *token*, searching ancestor containers too.

        Raises:
            DependencyNotFoundError: If no resolved provider is visible.
        """
        provider = self.container.get(token)
        if provider is None:
            raise DependencyNotFoundError(token)
        return provider.get_instance()

    def set_parent(self, parent_injector: Optional["Injector"]) -> None:
        if parent_injector is not None:
            self.container.set_parent(parent_injector.container)
            self.parent_injector = parent_injector

    @staticmethod
    def reset() -> None:
        """Clear the process-wide pending record and both class registries."""
        _state.default_pending().clear()
        _registry.reset()

    def __repr__(self) -> str:
        target = self.target_class.__name__ if self.target_class else None
        return f"Injector(target={target})"
