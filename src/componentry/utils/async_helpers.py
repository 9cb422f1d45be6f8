"""Async helpers for driving listener chains from synchronous emitters.

Event emission is synchronous while actions are coroutines. These helpers
bridge the two:

- inside a running event loop, handlers are scheduled as tasks and later
  awaited with :func:`drain_pending_tasks`;
- outside any loop, :func:`run_until_settled` drives the coroutine, and the
  handler tasks registered with :func:`track_task` while it runs, to
  completion before returning.

Examples:
    >>> async def fetch():
    ...     return "data"
    >>> run_until_settled(fetch())
    'data'
"""

import asyncio
from collections.abc import Awaitable
from contextvars import ContextVar
from typing import Any, TypeVar

from loguru import logger

T = TypeVar("T")

# Handler tasks the innermost run_until_settled() call must await
_settling: ContextVar[set[asyncio.Task[Any]] | None] = ContextVar("componentry_settling", default=None)


def has_running_loop() -> bool:
    """Return True when called from inside a running event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def track_task(task: asyncio.Task[Any]) -> None:
    """Register a handler task with the enclosing :func:`run_until_settled` call, if any."""
    tracked = _settling.get()
    if tracked is not None:
        tracked.add(task)


def run_until_settled(awaitable: Awaitable[T]) -> T:
    """Run an awaitable to completion from synchronous code.

    Handler tasks registered with :func:`track_task` while the awaitable runs
    (for example handlers of nested emissions) are awaited as well. Any
    other task still pending afterwards, such as a background poller started
    by an action, is cancelled when the temporary loop shuts down.

    Args:
        awaitable: Coroutine or other awaitable to execute

    Returns:
        The awaitable's result

    Raises:
        RuntimeError: If called while an event loop is already running
    """
    if has_running_loop():
        raise RuntimeError(
            "run_until_settled() cannot be called from a running event loop; "
            "schedule the awaitable as a task instead"
        )

    async def _main() -> T:
        tracked: set[asyncio.Task[Any]] = set()
        _settling.set(tracked)

        result = await awaitable
        await drain_pending_tasks(tracked)

        current = asyncio.current_task()
        leftovers = [task for task in asyncio.all_tasks() if task is not current]
        if leftovers:
            logger.debug(f"Cancelling {len(leftovers)} background task(s) left after settling")
            for task in leftovers:
                task.cancel()
        return result

    return asyncio.run(_main())


async def drain_pending_tasks(pending: set[asyncio.Task[Any]]) -> None:
    """Await tracked tasks until none remain.

    Tasks added to ``pending`` while draining are picked up as well. The first
    failure is re-raised once the current batch has finished.

    Args:
        pending: Mutable set of tasks; finished tasks are removed from it
    """
    loop = asyncio.get_running_loop()
    while pending:
        # Tasks left over from a loop that has since closed were already
        # awaited by run_until_settled()
        stale = {task for task in pending if task.get_loop() is not loop}
        pending.difference_update(stale)
        if not pending:
            break

        batch = list(pending)
        results = await asyncio.gather(*batch, return_exceptions=True)
        pending.difference_update(batch)

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            if len(failures) > 1:
                logger.debug(f"{len(failures) - 1} additional task failure(s) while draining")
            raise failures[0]


def prune_closed_loop_tasks(pending: set[asyncio.Task[Any]]) -> None:
    """Drop tasks whose event loop has been closed; they can never be awaited."""
    pending.difference_update({task for task in pending if task.get_loop().is_closed()})
