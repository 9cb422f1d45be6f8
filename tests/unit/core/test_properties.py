"""Unit tests for the property store and the set/get surface of Component."""

import pytest

from componentry import CHANGE_EVENT, Component, InvalidArgumentError
from componentry.core.properties import UNSET, PropertyStore, is_change


class TestIsChange:
    def test_equal_values_are_not_a_change(self):
        assert is_change("a", "a") is False
        assert is_change({"x": 1}, {"x": 1}) is False

    def test_different_values_are_a_change(self):
        assert is_change("a", "b") is True

    def test_unset_to_none_is_suppressed(self):
        assert is_change(UNSET, None) is False

    def test_defined_to_none_is_a_change(self):
        assert is_change("a", None) is True

    def test_unset_to_value_is_a_change(self):
        assert is_change(UNSET, 0) is True

    def test_equal_values_of_different_types_are_a_change(self):
        assert is_change(1, True) is True
        assert is_change(0, False) is True
        assert is_change(1, 1.0) is True


class TestPropertyStore:
    def test_assign_notifies_on_change(self):
        calls = []
        store = PropertyStore(["name"], notify=lambda name, value: calls.append((name, value)))

        assert store.assign("name", "first") is True
        assert store.assign("name", "first") is False

        assert calls == [("name", "first")]

    def test_unrecognized_name_is_ignored(self):
        store = PropertyStore(["name"])
        assert store.assign("foo", 1) is False
        assert store.read("foo") is None
        assert "foo" not in store.snapshot()

    def test_unset_reads_as_none(self):
        store = PropertyStore(["passed"])
        assert store.read("passed") is None
        assert store.is_set("passed") is False

    def test_push_creates_new_list(self):
        store = PropertyStore(["schema"])
        store.push("schema", {"component": "A"})
        first = store.read("schema")
        store.push("schema", {"component": "B"})

        assert first == [{"component": "A"}]
        assert store.read("schema") == [{"component": "A"}, {"component": "B"}]

    def test_snapshot_defaults_to_all_names(self):
        store = PropertyStore(["name", "passed"])
        store.assign("name", "x")
        assert store.snapshot() == {"name": "x", "passed": None}


class TestComponentSet:
    def test_set_rejects_non_mapping(self, component):
        for bad in (["name", "x"], "name", 3, None):
            with pytest.raises(InvalidArgumentError):
                component.set(bad)

    def test_set_non_mapping_does_not_mutate(self, component, recorder):
        component.on(CHANGE_EVENT, recorder)
        with pytest.raises(InvalidArgumentError):
            component.set([("name", "other")])
        assert component.get("name") == "first_name"
        assert recorder.calls == []

    def test_change_emits_specific_and_aggregate(self, component, recorder):
        specific = []
        component.on("name", specific.append)
        component.on(CHANGE_EVENT, recorder)

        component.set({"name": "last_name"})

        assert specific == ["last_name"]
        assert recorder.calls == [("name", "last_name")]

    def test_same_value_emits_nothing(self, component, recorder):
        component.on(CHANGE_EVENT, recorder)
        component.set({"name": "first_name"})
        assert recorder.calls == []

    def test_type_change_is_stored_and_emitted(self, component, recorder):
        component.on("passed", recorder)

        for value in (1, True, 0, False):
            component.set({"passed": value})

        assert recorder.calls == [(1,), (True,), (0,), (False,)]
        assert component.get("passed") is False

    def test_defined_to_none_emits(self, component, recorder):
        component.on("name", recorder)
        component.set({"name": None})
        assert recorder.calls == [(None,)]
        assert component.is_set("name") is True

    def test_undefined_to_none_is_silent(self, component, recorder):
        component.on("passed", recorder)
        component.set({"passed": None})
        assert recorder.calls == []
        assert component.is_set("passed") is False

    def test_unrecognized_property_is_ignored(self, component):
        component.set({"foo": 1})
        assert "foo" not in component.get()
        assert component.get("foo") is None


class TestComponentGet:
    def test_get_all_is_allow_listed(self, component):
        component._secret = "hidden"
        assert set(component.get()) == {"name", "listeners", "passed", "schema"}

    def test_get_one(self, component):
        assert component.get("name") == "first_name"
        assert component.get("passed") is None

    def test_get_many(self, component):
        component.set({"passed": {"id": 1}})
        assert component.get(["name", "passed"]) == {"name": "first_name", "passed": {"id": 1}}

    def test_get_many_with_unknown_name(self, component):
        assert component.get(["name", "foo"]) == {"name": "first_name", "foo": None}


class TestHelpers:
    def test_set_defaults_only_fills_missing(self, component):
        component._set_defaults({"name": "given"}, {"name": "default", "passed": 7})
        assert component.get("name") == "first_name"
        assert component.get("passed") == 7

    def test_set_on_and_get_from_nested(self, component, key_generator):
        child = Component(key_generator=key_generator)
        component._set_on(child, {"name": "child", "passed": 1}, ["name"])

        assert child.get("name") == "child"
        assert child.get("passed") is None
        assert component._get_from(child, "name", ["name"]) == "child"
        assert component._get_from(child, "passed", ["name"]) is None
