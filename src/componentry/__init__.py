"""
Componentry - the base object model of a declarative component framework.

Every field, form and action is a Component with a uniform property store,
change events and listener-driven action chains.
"""

__version__ = "0.1.0"

# Actions
from .actions import (
    ActionContext,
    ActionFactory,
    BaseAction,
    EmitAction,
    FunctionAction,
    SetAction,
)

# Configuration
from .config import Settings, settings

# Core
from .core import (
    CHANGE_EVENT,
    Component,
    EventBroadcaster,
    KeyGenerator,
    ListenerSpec,
    SchemaCompiler,
    SchemaForm,
)

# Errors
from .errors import (
    ActionFailure,
    ComponentError,
    InvalidArgumentError,
    MisconfigurationError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Component",
    "EventBroadcaster",
    "KeyGenerator",
    "ListenerSpec",
    "SchemaCompiler",
    "SchemaForm",
    "CHANGE_EVENT",
    # Actions
    "ActionContext",
    "ActionFactory",
    "BaseAction",
    "EmitAction",
    "FunctionAction",
    "SetAction",
    # Config
    "Settings",
    "settings",
    # Errors
    "ComponentError",
    "InvalidArgumentError",
    "ActionFailure",
    "MisconfigurationError",
]
