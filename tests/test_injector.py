# tests/test_injector.py
import pytest

from arbor_ioc import (
    DependencyNotFoundError,
    DIError,
    Injector,
    ProviderResolutionError,
    SpreadError,
    ValueProvider,
    bootstrap,
    dep,
    module,
    module_factory,
    use_class,
    use_existing,
    use_factory,
    use_value,
)


class Root:
    def __init__(self, **modules):
        self.modules = modules


def test_value_factory_class_scenario():
    calls = []

    def make_b(a, injector):
        calls.append((a, injector))
        return {"from_factory": a}

    @module
    class Klass:
        def __init__(self, b, injector):
            self.b = b
            self.injector = injector

    @module_factory(providers=[
        use_value("A", 1),
        use_factory("B", make_b, deps=["A"]),
        use_class("C", Klass, deps=["B"]),
    ])
    class App(Root):
        pass

    app = bootstrap(App)

    assert list(app.modules) == ["a", "b", "c"]
    assert app.modules["a"] == 1
    assert app.modules["b"] == {"from_factory": 1}
    assert isinstance(app.modules["c"], Klass)
    assert app.modules["c"].b is app.modules["b"]

    injector = app.modules["c"].injector
    assert isinstance(injector, Injector)
    assert calls == [(1, injector)]
    assert injector.target_class is App


def test_existing_alias_shares_the_instance():
    @module
    class Holder:
        def __init__(self, injector):
            self.injector = injector

    @module_factory(providers=[
        use_existing("D", "A"),
        use_value("A", 5),
        use_class("holder", Holder),
    ])
    class App(Root):
        pass

    app = bootstrap(App)
    injector = app.modules["holder"].injector
    assert injector.get("D") == 5
    assert injector.get("A") == 5
    assert app.modules["d"] == 5


def test_existing_alias_is_the_same_reference():
    @module
    class Service:
        def __init__(self, injector):
            self.injector = injector

    @module_factory(providers=[use_class("real", Service), use_existing("alias", "real")])
    class App(Root):
        pass

    app = bootstrap(App)
    injector = app.modules["real"].injector
    assert injector.get("alias") is injector.get("real")
    assert injector.resolve_module_provider(injector.universal_providers["alias"]).get_instance() is app.modules["real"]


def test_existing_alias_to_missing_target_raises():
    @module_factory(providers=[use_existing("alias", "ghost")])
    class App(Root):
        pass

    with pytest.raises(ProviderResolutionError, match=r"ExistingProvider \[ghost\] is not found"):
        bootstrap(App)


def test_resolution_is_idempotent():
    built = []

    @module
    class Service:
        def __init__(self, injector):
            built.append(self)
            self.injector = injector

    @module_factory(providers=[use_class("svc", Service)])
    class App(Root):
        pass

    app = bootstrap(App)
    injector = app.modules["svc"].injector
    provider = injector.universal_providers["svc"]

    assert injector.resolve_module_provider(provider) is provider
    assert injector.resolve_dependency("svc").get_instance() is app.modules["svc"]
    assert len(built) == 1


def test_subclass_overrides_provider_by_token():
    @module
    class Real:
        def __init__(self, injector):
            pass

    @module
    class Fake:
        def __init__(self, injector):
            pass

    @module_factory(providers=[use_class("repo", Real), use_value("name", "base")])
    class BaseApp(Root):
        pass

    @module_factory(providers=[use_class("repo", Fake)])
    class TestApp(BaseApp):
        pass

    app = bootstrap(TestApp)
    assert isinstance(app.modules["repo"], Fake)
    assert app.modules["name"] == "base"


def test_private_providers_are_not_exported():
    @module
    class Consumer:
        def __init__(self, secret, injector):
            self.secret = secret

    @module_factory(providers=[
        use_value("secret", "s3cr3t", private=True),
        use_class("consumer", Consumer, deps=["secret"]),
    ])
    class App(Root):
        pass

    app = bootstrap(App)
    assert "secret" not in app.modules
    assert app.modules["consumer"].secret == "s3cr3t"


def test_optional_dependency_is_omitted_when_missing():
    received = {}

    def make(**kwargs):
        received.update(kwargs)
        return "ok"

    @module_factory(providers=[use_factory("f", make, deps=[dep("cache", optional=True)])])
    class App(Root):
        pass

    bootstrap(App)
    assert "cache" not in received
    assert set(received) == {"injector"}


def test_optional_dependency_is_injected_when_present():
    @module_factory(providers=[
        use_value("cache", {"hits": 0}),
        use_factory("f", lambda cache=None, **_: cache, deps=[dep("cache", optional=True)]),
    ])
    class App(Root):
        pass

    app = bootstrap(App)
    assert app.modules["f"] is app.modules["cache"]


def test_required_dependency_missing_raises():
    @module_factory(providers=[use_factory("f", lambda **_: None, deps=["database"])])
    class App(Root):
        pass

    with pytest.raises(DependencyNotFoundError, match=r"Dependency \[database\] cannot be resolved") as ei:
        bootstrap(App)
    assert ei.value.token == "database"
    assert isinstance(ei.value, DIError)


def test_spread_merges_mappings_later_wins():
    @module
    class Server:
        def __init__(self, host, port, debug, injector):
            self.host, self.port, self.debug = host, port, debug

    @module_factory(providers=[
        use_value("defaults", {"host": "localhost", "port": 80, "debug": False}),
        use_value("overrides", {"port": 8080}),
        use_class("server", Server, deps=[dep("defaults", spread=True), dep("overrides", spread=True)]),
    ])
    class App(Root):
        pass

    server = bootstrap(App).modules["server"]
    assert (server.host, server.port, server.debug) == ("localhost", 8080, False)


def test_spread_of_non_mapping_raises():
    @module_factory(providers=[
        use_value("numbers", [1, 2, 3]),
        use_factory("f", lambda **_: None, deps=[dep("numbers", spread=True)]),
    ])
    class App(Root):
        pass

    with pytest.raises(SpreadError, match=r"Provider \[numbers\] cannot be spread"):
        bootstrap(App)


def test_unregistered_class_cannot_be_resolved():
    class Stranger:
        pass

    @module_factory(providers=[use_class("stranger", Stranger)])
    class App(Root):
        pass

    with pytest.raises(ProviderResolutionError, match=r"Provider \[stranger\] cannot be resolved"):
        bootstrap(App)


def test_resolve_module_provider_rejects_non_providers():
    with pytest.raises(DIError, match="Expected a valid provider"):
        Injector().resolve_module_provider("nope")


def test_dependencies_are_resolved_on_demand_in_declaration_order():
    order = []

    def make(name):
        def factory(**_):
            order.append(name)
            return name
        return factory

    @module_factory(providers=[
        use_factory("top", make("top"), deps=["middle"]),
        use_factory("middle", make("middle"), deps=["bottom"]),
        use_factory("bottom", make("bottom")),
    ])
    class App(Root):
        pass

    app = bootstrap(App)
    assert order == ["bottom", "middle", "top"]
    # exported in commit order
    assert list(app.modules) == ["bottom", "middle", "top"]


def test_class_dependencies_come_from_module_registration():
    @module(deps=["config"])
    class Base:
        def __init__(self, config, injector, **extra):
            self.config = config
            self.extra = extra

    @module(deps=[dep("cache", optional=True)])
    class Service(Base):
        pass

    @module_factory(providers=[use_value("config", {"x": 1}), use_value("cache", "c"), use_class("svc", Service)])
    class App(Root):
        pass

    svc = bootstrap(App).modules["svc"]
    assert svc.config == {"x": 1}
    assert svc.extra == {"cache": "c"}


def test_provider_deps_merge_over_module_registration():
    @module(deps=["config", "cache"])
    class Service:
        def __init__(self, config, injector, cache=None, clock=None):
            self.config, self.cache, self.clock = config, cache, clock

    @module_factory(providers=[
        use_value("config", "cfg"),
        use_value("clock", "tick"),
        use_class("svc", Service, deps=[dep("cache", optional=True), "clock"]),
    ])
    class App(Root):
        pass

    svc = bootstrap(App).modules["svc"]
    assert svc.config == "cfg"
    assert svc.cache is None
    assert svc.clock == "tick"


def test_get_unknown_token_raises():
    with pytest.raises(DependencyNotFoundError):
        Injector().get("missing")


def test_resolve_dependencies_always_adds_injector():
    injector = Injector()
    injector.universal_providers["a"] = ValueProvider("a", 1)
    bag = injector.resolve_dependencies(["a"])
    assert dict(bag) == {"a": 1, "injector": injector}


def test_add_module_hook_receives_every_exported_module():
    seen = []

    class HookedRoot(Root):
        def add_module(self, name, module):
            seen.append((name, module))

    @module_factory(providers=[use_value("one", 1), use_value("two", 2), use_value("hidden", 3, private=True)])
    class App(HookedRoot):
        pass

    bootstrap(App)
    assert seen == [("one", 1), ("two", 2)]


def test_bootstrap_logs_completion(captured_logs):
    @module_factory(providers=[use_value("a", 1)])
    class App(Root):
        pass

    bootstrap(App)
    assert any("Bootstrapped App with 1 module(s)" in line for line in captured_logs)
    assert any("Resolved [a] as ValueProvider" in line for line in captured_logs)
