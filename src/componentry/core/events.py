"""
Event Broadcaster.

Synchronous publish/subscribe for components. Handlers may be plain callables
or coroutine functions:

- ``emit()`` calls handlers in subscription order. An awaitable returned by a
  handler is scheduled on the running loop and tracked until ``settle()``;
  with no running loop it is driven to completion before ``emit()`` returns.
- ``emit_async()`` awaits every handler in subscription order.

Every property change goes through ``_emit_change()``, which fires the
property-specific event and the aggregate ``$change`` event.
"""

import asyncio
import inspect
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any

from loguru import logger

from componentry.utils.async_helpers import (
    drain_pending_tasks,
    has_running_loop,
    prune_closed_loop_tasks,
    run_until_settled,
    track_task,
)

Handler = Callable[..., Any]

# Aggregate event fired for every change, with (name, value)
CHANGE_EVENT = "$change"

# Lifecycle events
CREATE_EVENT = "create"
CREATED_EVENT = "created"
LOAD_EVENT = "load"
LOADED_EVENT = "loaded"

LIFECYCLE_EVENTS = (CREATE_EVENT, CREATED_EVENT, LOAD_EVENT, LOADED_EVENT)


class EventBroadcaster:
    """Named-event subscription and dual emission."""

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = {}
        self._pending: set[asyncio.Task[Any]] = set()
        self._bubbled_events: set[str] = set()

    # === Subscription ===

    def on(self, event: str, handler: Handler) -> Handler:
        """Subscribe ``handler`` to ``event``. Returns the handler."""
        self._handlers.setdefault(event, []).append(handler)
        return handler

    def once(self, event: str, handler: Handler) -> Handler:
        """Subscribe a handler that unsubscribes itself after the first firing."""

        def _once(*args: Any) -> Any:
            self.off(event, _once)
            return handler(*args)

        _once.__wrapped__ = handler
        return self.on(event, _once)

    def off(self, event: str, handler: Handler) -> bool:
        """
        Unsubscribe the most recently added occurrence of ``handler``.

        Handlers registered with ``once()`` can be removed by passing the
        original handler.

        Returns:
            True if a handler was removed.
        """
        handlers = self._handlers.get(event)
        if not handlers:
            return False

        for index in range(len(handlers) - 1, -1, -1):
            candidate = handlers[index]
            if candidate == handler or getattr(candidate, "__wrapped__", None) == handler:
                del handlers[index]
                if not handlers:
                    del self._handlers[event]
                return True
        return False

    def remove_all_listeners(self, event: str | None = None) -> None:
        """Drop every handler, or every handler of one event."""
        if event is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event, None)

    def listeners(self, event: str) -> list[Handler]:
        return list(self._handlers.get(event, ()))

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))

    def event_names(self) -> list[str]:
        return list(self._handlers.keys())

    # === Emission ===

    def emit(self, event: str, *args: Any) -> bool:
        """
        Fire ``event`` synchronously.

        Returns:
            True if the event had any handler.
        """
        handlers = self.listeners(event)
        for handler in handlers:
            result = handler(*args)
            if inspect.isawaitable(result):
                self._dispatch(event, result)
        return bool(handlers)

    async def emit_async(self, event: str, *args: Any) -> bool:
        """
        Fire ``event`` and await each handler in subscription order.

        Failures propagate to the caller; later handlers do not run.
        """
        handlers = self.listeners(event)
        for handler in handlers:
            result = handler(*args)
            if inspect.isawaitable(result):
                await result
        return bool(handlers)

    async def settle(self) -> None:
        """Await every handler task scheduled by ``emit()``.

        Raises:
            The first failure among the tracked tasks.
        """
        await drain_pending_tasks(self._pending)

    @property
    def pending_count(self) -> int:
        """Number of scheduled handler tasks not yet settled."""
        return len(self._pending)

    def _dispatch(self, event: str, awaitable: Any) -> None:
        # Failures from a closed loop were already raised by run_until_settled()
        prune_closed_loop_tasks(self._pending)

        if not has_running_loop():
            run_until_settled(awaitable)
            return

        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)
        track_task(task)
        task.add_done_callback(partial(self._on_task_done, event))

    def _on_task_done(self, event: str, task: asyncio.Task[Any]) -> None:
        # Failed tasks stay tracked so that settle() can re-raise them.
        # Sync-only hosts never settle; those are pruned once their loop closes.
        if task.cancelled() or task.exception() is None:
            self._pending.discard(task)
            return
        logger.error(f"Handler for '{event}' on {self!r} failed: {task.exception()}")

    def _emit_change(self, name: str, *args: Any) -> None:
        """Fire the specific event and the aggregate change event."""
        self.emit(name, *args)
        self.emit(CHANGE_EVENT, name, *args)

    async def _emit_change_async(self, name: str, *args: Any) -> None:
        await self.emit_async(name, *args)
        await self.emit_async(CHANGE_EVENT, name, *args)

    # === Lifecycle triggers ===

    def emit_load(self) -> None:
        """Signal that initial data population is complete.

        Should be called by the controller whenever the component is loaded,
        e.g. when the route showing it changes.
        """
        self._emit_change(LOAD_EVENT)

    async def emit_load_async(self) -> None:
        """Like ``emit_load()`` but awaits the full load chain."""
        await self._emit_change_async(LOAD_EVENT)

    # === Hierarchical propagation ===

    def _bubble_up_events(self, child: "EventBroadcaster", events: Iterable[str]) -> None:
        """Re-emit the chosen ``events`` of ``child`` as this broadcaster's own.

        The subscription lives on the child; this broadcaster keeps no
        reference to it.
        """
        for event in events:
            child.on(event, partial(self._emit_change, event))
            self._bubbled_events.add(event)
