"""Unit tests for Component construction and surface."""

import pytest

from componentry import CHANGE_EVENT, Component, InvalidArgumentError
from tests.utils.builders import TextField


class RecordingComponent(Component):
    """Records the aggregate change events fired during construction."""

    def __init__(self, props=None, **kwargs):
        self.changes = []
        super().__init__(props, **kwargs)

    def _emit_change(self, name, *args):
        self.changes.append(name)
        super()._emit_change(name, *args)


class TestConstruction:
    def test_default_construction(self, key_generator):
        component = Component(key_generator=key_generator)
        assert component.get("name") is None
        assert component.get("schema") == [Component.schema_fragment]
        assert component.get_key() == 100

    def test_rejects_non_mapping_props(self):
        with pytest.raises(InvalidArgumentError):
            Component(["name"])

    def test_construction_order(self, key_generator):
        component = RecordingComponent({"name": "x", "passed": 1}, key_generator=key_generator)
        assert component.changes == ["name", "schema", "passed", "create", "created"]

    def test_scenario_text_field_schema(self, key_generator):
        component = Component({"name": "x", "schema": {"component": "TextField"}}, key_generator=key_generator)

        schema = component.get("schema")
        assert isinstance(schema, list)
        assert schema[0] == Component.schema_fragment
        assert schema[-1] == {"component": "TextField"}

    def test_scenario_unknown_prop(self, component):
        component.set({"foo": 1})
        assert "foo" not in component.get()


class TestSubclassProps:
    def test_public_props_accumulate(self, key_generator):
        field = TextField({"name": "first", "label": "First"}, key_generator=key_generator)
        assert set(field.get()) == {"name", "listeners", "passed", "schema", "label"}
        assert field.get("label") == "First"

    def test_base_component_ignores_subclass_props(self, component):
        component.set({"label": "First"})
        assert component.get("label") is None

    def test_subclass_change_events(self, key_generator, recorder):
        field = TextField(key_generator=key_generator)
        field.on(CHANGE_EVENT, recorder)
        field.set({"label": "Given"})
        assert recorder.calls == [("label", "Given")]

    def test_known_events(self, key_generator):
        field = TextField(key_generator=key_generator)
        known = field.known_events()
        assert {"label", "click", "create", "created", "load", "loaded", CHANGE_EVENT} <= known


class TestClassName:
    def test_defaults_to_python_class(self, component):
        assert component.get_class_name() == "Component"

    def test_override_for_generated_types(self, component):
        component._set_class_name("MyField")
        assert component.get_class_name() == "MyField"
        assert "MyField" in repr(component)
