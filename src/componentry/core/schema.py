"""
Schema Accumulation.

A component describes itself with schema fragments: literal mappings such as
``{"component": "TextField"}``. Each component class may declare its own
fragment in a ``schema_fragment`` class attribute. Fragments are never
overwritten; they stack into an ordered list in this order:

1. class fragments, walking the MRO from the most basic class to the most derived;
2. the ``schema`` prop passed to the constructor;
3. every later ``set({"schema": ...})`` call.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from componentry.errors import InvalidArgumentError

if TYPE_CHECKING:
    from componentry.core.component import Component


class SchemaFragment(BaseModel):
    """Structural check for a schema fragment. Unknown keys are allowed."""

    model_config = ConfigDict(extra="allow")

    component: str
    fields: list[dict[str, Any]] | None = None


def validate_fragment(fragment: Any) -> Mapping[str, Any]:
    """
    Check that ``fragment`` looks like a schema fragment.

    The fragment itself is returned unchanged; validation never rewrites it.

    Raises:
        InvalidArgumentError: If the fragment is not a mapping with a ``component`` name.
    """
    if not isinstance(fragment, Mapping):
        raise InvalidArgumentError(
            "schema fragment must be a mapping",
            details={"type": type(fragment).__name__},
        )
    try:
        SchemaFragment.model_validate(dict(fragment))
    except ValidationError as e:
        raise InvalidArgumentError(
            "schema fragment is malformed",
            details={"errors": e.errors(include_url=False)},
            original_error=e,
        ) from e
    return fragment


def class_fragments(component_class: type) -> list[Mapping[str, Any]]:
    """Collect ``schema_fragment`` declarations along the MRO, base-first.

    Only fragments a class declares itself are collected, so a subclass that
    declares nothing does not repeat its parent's fragment.
    """
    fragments = []
    for klass in reversed(component_class.__mro__):
        fragment = klass.__dict__.get("schema_fragment")
        if fragment is not None:
            fragments.append(fragment)
    return fragments


class SchemaCompiler(ABC):
    """Materializes a runtime component from a schema fragment."""

    @abstractmethod
    def new_component(self, fragment: Mapping[str, Any]) -> "Component":
        pass


class SchemaForm(ABC):
    """A form that can absorb the fields of another component."""

    @abstractmethod
    def copy_fields(self, component: "Component") -> None:
        pass


def build_schema_form(
    fragments: Iterable[Mapping[str, Any]] | None,
    form: SchemaForm,
    compiler: SchemaCompiler,
) -> None:
    """
    Materialize each fragment and merge its fields into ``form``.

    Args:
        fragments: Accumulated fragments, base-first. None is treated as empty.
        form: Target form receiving the fields.
        compiler: Builds a component for each fragment.
    """
    for fragment in fragments or ():
        schema_form = compiler.new_component(fragment)
        form.copy_fields(schema_form)
