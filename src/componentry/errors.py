"""
Componentry Error Classification System.

This module provides the exceptions raised by the component object model.

Error Categories:
-----------------
1. Invalid Arguments: Caller errors detected before any mutation
   - ``set`` called with something that is not a mapping
   - Malformed listener declarations
   - Malformed schema fragments

2. Action Failures: An injected action raised while a listener chain ran
   - Aborts the remainder of that chain
   - The milestone (``created``/``loaded``) for that firing is not emitted

3. Misconfiguration: A listener names an event the component never emits
   - Silent no-op by default, raised only when strict listeners are enabled

Nothing in this package retries. Resilience belongs inside injected actions.

Usage:
------
    from componentry.errors import ActionFailure, InvalidArgumentError

    try:
        component.emit_load()
    except ActionFailure as e:
        logger.error(f"Load chain failed on {e.event}: {e.original_error}")
"""

from typing import Any


class ComponentError(Exception):
    """
    Base exception for all componentry errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


class InvalidArgumentError(ComponentError, TypeError):
    """
    Raised when a component operation receives a malformed argument.

    Common causes:
    - ``set()`` called with a list, string or ``None``
    - A listener declaration without an ``event``
    - A schema fragment that is not a mapping
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class ActionFailure(ComponentError):
    """
    Raised when an action in a listener chain fails.

    Attributes:
        event: The event whose chain was aborted
        action: The action that raised
    """

    def __init__(
        self,
        message: str = "Action failed",
        event: str | None = None,
        action: Any = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["event"] = event
        if action is not None:
            details["action"] = type(action).__name__
        super().__init__(message, details, original_error)
        self.event = event
        self.action = action


class MisconfigurationError(ComponentError):
    """
    Raised in strict mode when a listener names an event with no emission path.
    """

    def __init__(
        self,
        message: str = "Listener is bound to an event that is never emitted",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


def wrap_action_error(error: Exception, event: str, action: Any = None) -> ActionFailure:
    """
    Wrap an exception raised by an action in an ActionFailure.

    An ActionFailure raised by a nested chain is returned unchanged so that
    the innermost event and action stay visible.

    Args:
        error: The original exception
        event: Event whose chain was running
        action: The action that raised

    Returns:
        ActionFailure wrapping the original error
    """
    if isinstance(error, ActionFailure):
        return error
    return ActionFailure(
        message=f"Action {type(action).__name__} failed during '{event}'",
        event=event,
        action=action,
        original_error=error,
    )
