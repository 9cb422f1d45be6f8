"""
Component Base Class.

Every field, form and action of a declarative UI is a ``Component``:

- PropertyStore: an explicit map of recognized properties with change detection
- EventBroadcaster: specific + aggregate ``$change`` events for every change
- ListenerWiring: declared ``{event, actions}`` listeners run as action chains
- Schema accumulation: per-class ``schema_fragment`` declarations stack base-first
- Identity: an opaque key issued once, after the ``create`` event

Construction:
    1. ``name`` is set first, since building a component may depend on it
       (e.g. sub fields prefixed with the name).
    2. Class schema fragments are pushed, most basic class first.
    3. Constructor props go through ``set()``, wiring any listeners.
    4. ``create`` is emitted.
    5. The identity key is issued.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from componentry.config.settings import settings
from componentry.core.events import CHANGE_EVENT, CREATE_EVENT, LIFECYCLE_EVENTS, EventBroadcaster
from componentry.core.identity import KeyGenerator, default_key_generator
from componentry.core.listeners import ListenerWiring, normalize_listeners
from componentry.core.properties import PropertyStore
from componentry.core.schema import (
    SchemaCompiler,
    SchemaForm,
    build_schema_form,
    class_fragments,
    validate_fragment,
)
from componentry.errors import InvalidArgumentError

# Properties handled by set() itself
CORE_PROPS = ("name", "listeners", "passed", "schema")


def _collect_class_names(component_class: type, attr: str) -> tuple[str, ...]:
    """Union of a tuple class attribute along the MRO, base-first."""
    names: dict[str, None] = {}
    for klass in reversed(component_class.__mro__):
        for name in klass.__dict__.get(attr, ()):
            names[name] = None
    return tuple(names)


class Component(EventBroadcaster):
    """
    Generic reactive, schema-describable component.

    Subclasses widen the model declaratively:

        class TextField(Component):
            schema_fragment = {"component": "Form", "fields": [{"name": "label", "component": "TextField"}]}
            public_props = ("label",)

    Example:
        field = TextField({"name": "first_name", "label": "First Name"})
        field.on("label", lambda value: print("label is now", value))
        field.set({"label": "Given Name"})
    """

    # Own fragment of this class; accumulated along the MRO
    schema_fragment: Mapping[str, Any] | None = {
        "component": "Form",
        "fields": [
            {
                # Only used by the declarative definition
                "name": "component",
                "component": "TextField",
            },
            {
                "name": "name",
                "component": "TextField",
                "required": True,
            },
            {
                "name": "schema",
                "component": "FormField",
                "form": {"component": "ObjectForm"},
            },
        ],
    }

    # Recognized, readable property names; accumulated along the MRO
    public_props: tuple[str, ...] = CORE_PROPS

    # Extra events a subclass emits; accumulated along the MRO
    emitted_events: tuple[str, ...] = ()

    # None defers to settings.STRICT_LISTENERS
    strict_listeners: bool | None = None

    def __init__(
        self,
        props: Mapping[str, Any] | None = None,
        key_generator: KeyGenerator | None = None,
    ):
        """
        Initialize the component.

        Args:
            props: Initial properties, applied through ``set()``.
            key_generator: Source of the identity key (process default if None).

        Raises:
            InvalidArgumentError: If props is not a mapping.
        """
        super().__init__()

        if props is None:
            props = {}
        if not isinstance(props, Mapping):
            raise InvalidArgumentError(
                "props must be a mapping",
                details={"type": type(props).__name__},
            )

        self._key: int | None = None
        self._class_name: str | None = None
        self._key_generator = key_generator or default_key_generator()
        self._props = PropertyStore(
            _collect_class_names(type(self), "public_props"),
            notify=self._emit_change,
        )

        strict = settings.STRICT_LISTENERS if self.strict_listeners is None else self.strict_listeners
        self._wiring = ListenerWiring(self, strict=strict)
        self._wiring.install_defaults()

        self._set_name(props)
        self._create(props)
        self.set(props)

        # Emitted after the initial listeners are wired
        self._emit_change(CREATE_EVENT)

        # Separate keyspace so renderers can tell instances apart
        self._key = self._key_generator.next_key()

    def _create(self, props: Mapping[str, Any]) -> None:
        """Push the schema fragments declared by the class hierarchy."""
        for fragment in class_fragments(type(self)):
            self._push("schema", fragment)

    # === Setting ===

    def set(self, props: Mapping[str, Any]) -> None:
        """
        Set properties.

        Unrecognized names are ignored. ``listeners`` re-wires every
        subscription; ``schema`` appends a fragment.

        Raises:
            InvalidArgumentError: If props is not a mapping, or a listener or
                schema value is malformed. Raised before anything changes.
            MisconfigurationError: In strict mode, for a listener on an event
                this component never emits.
        """
        if not isinstance(props, Mapping):
            raise InvalidArgumentError(
                "props must be a mapping",
                details={"type": type(props).__name__},
            )

        listeners = None
        if "listeners" in props:
            listeners = normalize_listeners(props["listeners"])
            self._wiring.check_events(listener.event for listener in listeners)
        if props.get("schema") is not None:
            validate_fragment(props["schema"])

        self._set_name(props)
        if listeners is not None:
            self._set_listeners(props, listeners)
        self._set_passed(props)

        if props.get("schema") is not None:
            # Pushed so that fragments accumulate across the layers
            self._push("schema", props["schema"])

        for name, value in props.items():
            if name in CORE_PROPS:
                continue
            if self._props.recognizes(name):
                self._set(name, value)
            else:
                logger.debug(f"{self!r} ignores unrecognized property '{name}'")

    def _set(self, name: str, value: Any) -> bool:
        return self._props.assign(name, value)

    def _push(self, name: str, value: Any) -> bool:
        return self._props.push(name, value)

    def _set_if_present(self, props: Mapping[str, Any], *names: str) -> None:
        for name in names:
            if name in props:
                self._set(name, props[name])

    def _set_name(self, props: Mapping[str, Any]) -> None:
        self._set_if_present(props, "name")

    def _set_passed(self, props: Mapping[str, Any]) -> None:
        self._set_if_present(props, "passed")

    def _set_listeners(self, props: Mapping[str, Any], listeners: list) -> None:
        # Actions see the passed data as if_data without declaring it
        if_data = props["passed"] if "passed" in props else self.get("passed")
        self._wiring.wire(listeners, if_data=if_data)
        self._set("listeners", listeners if props["listeners"] is not None else None)

    def _set_defaults(self, props: Mapping[str, Any], values: Mapping[str, Any]) -> None:
        """Set each default whose name the caller did not supply."""
        for name, value in values.items():
            if name not in props:
                self._set(name, value)

    def _set_on(self, component: "Component", props: Mapping[str, Any], names: Iterable[str]) -> None:
        """Forward the given props to a nested component."""
        for name in names:
            if name in props:
                component.set({name: props[name]})

    def _get_from(self, component: "Component", name: str, names: Iterable[str]) -> Any:
        """Read a prop from a nested component if ``name`` is forwarded."""
        if name in names:
            return component.get(name)
        return None

    # === Getting ===

    def get(self, names: str | Iterable[str] | None = None) -> Any:
        """
        Read properties.

        Args:
            names: None for every public property, a name for one value,
                or an iterable of names for a partial dict.

        Returns:
            A dict of values, or a single value. Unset and unrecognized
            names read as None.
        """
        if names is None:
            return self._props.snapshot()
        if isinstance(names, str):
            return self.get_one(names)
        return {name: self.get_one(name) for name in names}

    def get_one(self, name: str) -> Any:
        if not self._props.recognizes(name):
            return None
        return self._props.read(name)

    def is_set(self, name: str) -> bool:
        """True once ``name`` has been assigned, even if assigned None."""
        return self._props.is_set(name)

    def known_events(self) -> set[str]:
        """Every event this component can emit."""
        return (
            set(self._props.names)
            | {CHANGE_EVENT}
            | set(LIFECYCLE_EVENTS)
            | set(_collect_class_names(type(self), "emitted_events"))
            | self._bubbled_events
        )

    # === Identity ===

    def get_key(self) -> int | None:
        """Identity key; None only while the constructor is still running."""
        return self._key

    def get_class_name(self) -> str:
        # Generated classes carry the name they were declared with
        return self._class_name or type(self).__name__

    def _set_class_name(self, class_name: str) -> None:
        self._class_name = class_name

    def clone(self) -> "Component":
        """
        Deep copy of the component's state without any subscribers.

        The clone gets a fresh key from the same key generator. Listeners
        must be re-attached with ``set({"listeners": ...})``.
        """
        return copy.deepcopy(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> "Component":
        cls = type(self)
        clone = cls.__new__(cls)
        memo[id(self)] = clone

        EventBroadcaster.__init__(clone)
        clone._class_name = self._class_name
        clone._key_generator = self._key_generator
        clone._props = PropertyStore(self._props.names, notify=clone._emit_change)
        clone._props.load(copy.deepcopy(self._props.values(), memo))
        clone._wiring = ListenerWiring(clone, strict=self._wiring.strict)

        # Attributes added by subclasses
        for attr, value in self.__dict__.items():
            if attr not in clone.__dict__:
                setattr(clone, attr, copy.deepcopy(value, memo))

        clone._key = clone._key_generator.next_key()
        return clone

    # === Schema ===

    def build_schema_form(self, form: SchemaForm, compiler: SchemaCompiler) -> None:
        """Materialize every accumulated fragment and merge its fields into ``form``."""
        build_schema_form(self.get("schema"), form, compiler)

    def __repr__(self) -> str:
        return f"<{self.get_class_name()}(name={self._props.read('name')!r}, key={self._key})>"
