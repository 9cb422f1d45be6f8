"""Base action interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from componentry.core.component import Component


@dataclass
class ActionContext:
    """
    Context handed to every action in a listener chain.

    Attributes:
        event: Name of the event that fired.
        component: The component the listener is declared on.
        if_data: The component's ``passed`` data, captured when the listener was wired.
        arguments: Result of the previous action in the chain (None for the first).
    """
    event: str
    component: "Component"
    if_data: Any = None
    arguments: Any = None


class BaseAction(ABC):
    """Abstract base class for actions.

    An action is one asynchronous unit of work run as part of a listener's
    chain. Its return value becomes the next action's ``arguments``.
    """

    # Type identifier used by ActionFactory
    action_type: str = "base"

    @abstractmethod
    async def run(self, context: ActionContext) -> Any:
        """Execute the action.

        Args:
            context: Event, component, if_data and the previous result

        Returns:
            Value passed to the next action as ``arguments``
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
