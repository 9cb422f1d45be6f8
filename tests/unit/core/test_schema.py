"""Unit tests for schema accumulation."""

import pytest

from componentry import Component, InvalidArgumentError
from componentry.core.schema import class_fragments, validate_fragment
from tests.utils.builders import FakeCompiler, FakeForm, TextField


class TestAccumulation:
    def test_constructor_schema_follows_base_fragment(self, key_generator, text_field_schema):
        component = Component({"name": "x", "schema": text_field_schema}, key_generator=key_generator)

        schema = component.get("schema")
        assert schema[0] == Component.schema_fragment
        assert schema[-1] == {"component": "TextField"}

    def test_fragments_accumulate_in_order(self, component):
        a = {"component": "A"}
        b = {"component": "B"}
        component.set({"schema": a})
        component.set({"schema": b})
        assert component.get("schema")[-2:] == [a, b]

    def test_each_push_emits_change(self, component, recorder):
        component.on("schema", recorder)
        component.set({"schema": {"component": "A"}})
        assert len(recorder.calls) == 1

    def test_derived_fragment_extends_base(self, key_generator):
        field = TextField({"name": "first"}, key_generator=key_generator)
        assert field.get("schema") == [Component.schema_fragment, TextField.schema_fragment]

    def test_subclass_without_fragment_does_not_repeat(self):
        class PlainField(TextField):
            pass

        assert class_fragments(PlainField) == [Component.schema_fragment, TextField.schema_fragment]

    def test_malformed_fragment_is_rejected_before_mutation(self, component):
        before = component.get("schema")
        with pytest.raises(InvalidArgumentError):
            component.set({"name": "changed", "schema": {"fields": []}})
        assert component.get("schema") == before
        assert component.get("name") == "first_name"


class TestValidateFragment:
    def test_returns_fragment_unchanged(self):
        fragment = {"component": "TextField", "label": "Extra keys allowed"}
        assert validate_fragment(fragment) is fragment

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidArgumentError):
            validate_fragment(["component"])


class TestBuildSchemaForm:
    def test_materializes_every_fragment(self, key_generator):
        field = TextField({"schema": {"component": "Extra"}}, key_generator=key_generator)
        compiler = FakeCompiler()
        form = FakeForm()

        field.build_schema_form(form, compiler)

        assert compiler.fragments == field.get("schema")
        assert [c.get("name") for c in form.copied] == ["Form", "Form", "Extra"]
