"""
Core Component Module.

Provides the base object model: property storage, event broadcasting,
listener wiring, schema accumulation and identity keys.
"""

from .component import Component
from .events import (
    CHANGE_EVENT,
    CREATE_EVENT,
    CREATED_EVENT,
    LOAD_EVENT,
    LOADED_EVENT,
    EventBroadcaster,
)
from .identity import KeyGenerator, default_key_generator
from .listeners import ListenerSpec, ListenerWiring, normalize_listeners
from .properties import UNSET, PropertyStore
from .schema import SchemaCompiler, SchemaForm, SchemaFragment, build_schema_form

__all__ = [
    "Component",
    "EventBroadcaster",
    "CHANGE_EVENT",
    "CREATE_EVENT",
    "CREATED_EVENT",
    "LOAD_EVENT",
    "LOADED_EVENT",
    "KeyGenerator",
    "default_key_generator",
    "ListenerSpec",
    "ListenerWiring",
    "normalize_listeners",
    "PropertyStore",
    "UNSET",
    "SchemaCompiler",
    "SchemaForm",
    "SchemaFragment",
    "build_schema_form",
]
