# tests/test_api.py
import arbor_ioc.api as api
from arbor_ioc import Injector, PendingRecord, module, module_factory, use_value
from arbor_ioc._state import default_pending, isolated_pending, pending_or_default
from arbor_ioc.registry import module_registry, provider_registry


def test_reset_clears_pending_and_registries():
    @module
    class Svc:
        pass

    @module_factory(providers=[use_value("a", 1)])
    class App:
        def __init__(self, **_):
            pass

    default_pending().add("stale")
    api.reset()

    assert default_pending().chain() == ()
    assert not module_registry.has(Svc)
    assert not provider_registry.has(App)


def test_bootstrap_returns_root_instance():
    @module_factory(providers=[use_value("greeting", "hi")])
    class App:
        def __init__(self, greeting):
            self.greeting = greeting

    app = api.bootstrap(App)
    assert isinstance(app, App)
    assert app.greeting == "hi"


def test_bootstrap_with_parent_injector():
    @module_factory(providers=[use_value("shared", 42)])
    class Parent:
        def __init__(self, **_):
            pass

    parent = Injector()
    parent.build(Parent)

    @module_factory(providers=[])
    class Child:
        def __init__(self, **modules):
            self.modules = modules

    child = api.bootstrap(Child, parent)
    assert child.modules == {}
    assert parent.get("shared") == 42


def test_pending_record_keeps_entry_order():
    record = PendingRecord()
    record.add("b")
    record.add("a")
    record.add("b")
    assert record.chain() == ("b", "a")
    assert "a" in record
    assert [] not in record
    record.discard("b")
    record.discard("missing")
    assert list(record) == ["a"]
    assert len(record) == 1


def test_state_helpers():
    mine = PendingRecord()
    assert pending_or_default(None) is default_pending()
    assert pending_or_default(mine) is mine
    with isolated_pending() as record:
        record.add("x")
        assert record is not default_pending()
    assert record.chain() == ()
