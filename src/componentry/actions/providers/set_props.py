"""Action setting properties on the listening component."""

from typing import Any

from ..base import ActionContext, BaseAction


class SetAction(BaseAction):
    """Set properties on ``context.component``.

    With ``from_arguments=True`` the previous action's result (a mapping) is
    merged over ``props`` before setting.
    """

    action_type = "set"

    def __init__(self, props: dict[str, Any] | None = None, from_arguments: bool = False):
        self.props = dict(props or {})
        self.from_arguments = from_arguments

    async def run(self, context: ActionContext) -> Any:
        props = dict(self.props)
        if self.from_arguments and context.arguments:
            props.update(context.arguments)
        context.component.set(props)
        return context.arguments

    def __repr__(self) -> str:
        return f"<SetAction(props={list(self.props)}, from_arguments={self.from_arguments})>"
