"""Action emitting an event on the listening component."""

from typing import Any

from ..base import ActionContext, BaseAction


class EmitAction(BaseAction):
    """Emit ``event`` on ``context.component`` and pass ``arguments`` through."""

    action_type = "emit"

    def __init__(self, event: str, value: Any = None):
        if not event:
            raise ValueError("EmitAction requires an event name")
        self.event = event
        self.value = value

    async def run(self, context: ActionContext) -> Any:
        await context.component._emit_change_async(self.event, self.value)
        return context.arguments

    def __repr__(self) -> str:
        return f"<EmitAction(event={self.event!r})>"
