"""Action wrapping a plain callable."""

import inspect
from collections.abc import Callable
from typing import Any

from ..base import ActionContext, BaseAction


class FunctionAction(BaseAction):
    """Run a sync or async callable with the action context.

    Example:
        async def fetch(ctx):
            return await api.get(ctx.component.get("name"))

        FunctionAction(fetch)
    """

    action_type = "function"

    def __init__(self, func: Callable[[ActionContext], Any]):
        if not callable(func):
            raise TypeError(f"FunctionAction expects a callable, got {type(func).__name__}")
        self.func = func

    async def run(self, context: ActionContext) -> Any:
        result = self.func(context)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"<FunctionAction({name})>"
