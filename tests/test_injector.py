import logging
import unittest
from types import SimpleNamespace

import pytest

from wirebox import (
    InjectionResult,
    Injector,
    Registry,
    TargetKind,
    UnsupportedDescriptorKind,
    UnsupportedTargetKind,
    add,
    classify_target,
    configure,
    inject,
)


class TestDirectInjections(unittest.TestCase):
    def setUp(self):
        Registry.reset_instance()
        add(lambda: "hello", "a")
        add(lambda: "bye", "b")

    def test_inject_to_an_object(self):
        target = SimpleNamespace(dependencies="a")
        inject(target)
        assert target.a() == "hello"

    def test_registrations_are_remembered_between_injections(self):
        first = SimpleNamespace(dependencies="a")
        second = SimpleNamespace(dependencies="a")
        inject(first)
        inject(second)
        assert second.a is first.a

    def test_list_of_dependencies_with_missing_entry(self):
        target = SimpleNamespace(dependencies=["a", "b", "c"])
        result = inject(target)

        assert target.a() == "hello"
        assert target.b() == "bye"
        assert not hasattr(target, "c")
        assert result.missing == ["c"]
        assert result.succeeded

    def test_named_injections(self):
        target = SimpleNamespace(dependencies={"a": "functionA", "b": "functionB"})
        result = inject(target)

        assert target.functionA() == "hello"
        assert target.functionB() == "bye"
        assert not hasattr(target, "a")
        assert result.injected == {"a": "functionA", "b": "functionB"}

    def test_inject_an_anonymous_object(self):
        add(SimpleNamespace(run=lambda: "running"), "a")
        target = SimpleNamespace(dependencies="a")
        inject(target)
        assert target.a.run() == "running"

    def test_reregistering_overwrites(self):
        add("v1", "x")
        add("v2", "x")
        target = SimpleNamespace(dependencies="x")
        inject(target)
        assert target.x == "v2"

    def test_missing_dependency_leaves_existing_property_alone(self):
        target = SimpleNamespace(dependencies=["a", "unknown"], unknown="untouched")
        inject(target)
        assert target.unknown == "untouched"


def test_inject_into_a_class_is_shared_by_instances():
    add(SimpleNamespace(run=lambda: "running"), "a")

    class Tester:
        dependencies = "a"

        @classmethod
        def class_run(cls):
            return cls.a.run()

        def run(self):
            return self.a.run()

    inject(Tester)

    assert Tester.a.run() == "running"
    assert Tester.class_run() == "running"
    assert Tester().run() == "running"


def test_inject_into_an_instance_does_not_touch_the_class():
    add("value", "a")

    class Tester:
        dependencies = "a"

    one, other = Tester(), Tester()
    inject(one)

    assert one.a == "value"
    assert not hasattr(other, "a")
    assert not hasattr(Tester, "a")


def test_inject_into_a_function():
    add(10, "limit")

    def handler():
        return handler.limit

    handler.dependencies = ["limit"]
    inject(handler)
    assert handler() == 10


def test_inject_into_a_mapping_sets_items():
    add(lambda: "hello", "a")
    target = {"dependencies": {"a": "greet"}}
    inject(target)
    assert target["greet"]() == "hello"


def test_registered_none_is_assigned():
    add(None, "nothing")
    target = SimpleNamespace(dependencies="nothing", nothing="before")
    result = inject(target)
    assert target.nothing is None
    assert result.missing == []


def test_injection_is_idempotent():
    add(1, "a")
    add(2, "b")
    target = SimpleNamespace(dependencies={"a": "x", "b": "y"})

    inject(target)
    first = dict(vars(target))
    inject(target)

    assert vars(target) == first


def test_result_records_target_and_diagnostics():
    target = SimpleNamespace(dependencies=["missing"])
    result = inject(target)

    assert isinstance(result, InjectionResult)
    assert result.target is target
    assert result.diagnostics == ["Injectable 'missing' is not defined"]


def test_target_without_dependencies_is_left_alone():
    target = SimpleNamespace()
    result = inject(target)
    assert vars(target) == {}
    assert result.diagnostics == ["No dependencies found, ignoring"]


def test_missing_dependency_is_logged(caplog):
    inject(SimpleNamespace(dependencies="ghost"))
    assert "Injectable 'ghost' is not defined" in caplog.text
    assert caplog.records[-1].levelno == logging.WARNING


def test_quiet_mode_silences_log_but_keeps_result(caplog):
    configure(quiet=True)
    result = inject(SimpleNamespace(dependencies="ghost"))

    assert "ghost" not in caplog.text
    assert result.missing == ["ghost"]
    assert result.succeeded


def test_quiet_injector_instance():
    injector = Injector(quiet=True)
    result = injector.inject(SimpleNamespace(dependencies="ghost"))
    assert result.diagnostics == ["Injectable 'ghost' is not defined"]


def test_injector_uses_explicit_registry():
    Registry.instance().add("global", "a")
    Registry.reset_instance()
    isolated = Registry.instance()
    isolated.add("isolated", "a")

    injector = Injector(registry=isolated)
    target = SimpleNamespace(dependencies="a")
    injector.inject(target)

    assert target.a == "isolated"


def test_malformed_descriptor_aborts_the_target():
    target = SimpleNamespace(dependencies=5)
    with pytest.raises(UnsupportedDescriptorKind):
        inject(target)


@pytest.mark.parametrize(
    ("target", "kind"),
    [
        ([], TargetKind.SEQUENCE),
        ((1, 2), TargetKind.SEQUENCE),
        ("some/path", TargetKind.PATH),
        (SimpleNamespace(), TargetKind.OBJECT),
        ({}, TargetKind.OBJECT),
        (int, TargetKind.OBJECT),
        (len, TargetKind.OBJECT),
    ],
)
def test_classify_target(target, kind):
    assert classify_target(target) is kind


@pytest.mark.parametrize("target", [None, 3, 2.5, True, b"bytes"])
def test_unsupported_target_kind(target):
    with pytest.raises(UnsupportedTargetKind) as ctx:
        inject(target)
    assert "not defined" in str(ctx.value)


def test_malformed_mapping_assigns_nothing():
    add("value", "a")
    target = SimpleNamespace(dependencies={"a": "a", "b": 7})

    with pytest.raises(UnsupportedDescriptorKind):
        inject(target)

    assert not hasattr(target, "a")
