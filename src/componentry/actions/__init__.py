"""Actions run by listener chains."""

from .base import ActionContext, BaseAction
from .factory import ActionFactory
from .providers import EmitAction, FunctionAction, SetAction

__all__ = [
    "ActionContext",
    "BaseAction",
    "ActionFactory",
    "EmitAction",
    "FunctionAction",
    "SetAction",
]
