from .emit import EmitAction
from .function import FunctionAction
from .set_props import SetAction

__all__ = ["EmitAction", "FunctionAction", "SetAction"]
