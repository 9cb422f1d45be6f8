"""Action factory for creating action instances from plain data."""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from .base import BaseAction
from .providers.emit import EmitAction
from .providers.function import FunctionAction
from .providers.set_props import SetAction


class ActionFactory:
    """Action factory.

    Creates actions by type so listeners can be declared as data:

        {"event": "create", "actions": [{"action": "set", "props": {"passed": 1}}]}

    Built-in types:
    - function: wrap a callable (``func``)
    - set: set properties on the component (``props``)
    - emit: emit an event on the component (``event``)
    """

    _registry: dict[str, type[BaseAction]] = {
        "function": FunctionAction,
        "set": SetAction,
        "emit": EmitAction,
    }

    @classmethod
    def create(cls, action_type: str, **params: Any) -> BaseAction:
        """Create an action instance by type.

        Args:
            action_type: Type identifier (e.g., "set")
            **params: Initialization parameters for the action

        Returns:
            Action instance

        Raises:
            ValueError: If action type is not registered
        """
        if action_type not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ValueError(
                f"Unknown action type: '{action_type}'. "
                f"Available types: {available}"
            )

        action_class = cls._registry[action_type]
        logger.debug(f"Creating {action_class.__name__} with params: {params}")

        return action_class(**params)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> BaseAction:
        """Create an action from a mapping with an ``action`` type key."""
        params = dict(config)
        action_type = params.pop("action", None)
        if not action_type:
            raise ValueError(f"Action config is missing the 'action' key: {config}")
        return cls.create(action_type, **params)

    @classmethod
    def register(cls, action_type: str, action_class: type[BaseAction]):
        """Register a new action type.

        Args:
            action_type: Type identifier
            action_class: Action class to register

        Raises:
            TypeError: If action_class is not a subclass of BaseAction
        """
        if not issubclass(action_class, BaseAction):
            raise TypeError(
                f"{action_class.__name__} must be a subclass of BaseAction"
            )

        cls._registry[action_type] = action_class
        logger.info(f"Registered action type '{action_type}': {action_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of available action types."""
        return list(cls._registry.keys())
