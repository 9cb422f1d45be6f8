"""
Listener Wiring.

Compiles declared listeners (``{event, actions}``) into live subscriptions on
a component and runs their action chains.

Per (component, event) the wiring goes UNSUBSCRIBED -> SUBSCRIBED when a
``set`` call supplies ``listeners``, fires on every occurrence of the event,
and is torn down and rebuilt by the next ``set`` call that supplies
``listeners``.

Milestones:
    ``create`` and ``load`` each have a derived milestone (``created`` and
    ``loaded``). When listeners are declared on the base event, the milestone
    is emitted once, after every chain for that firing has resolved. When no
    listener is declared, a pass-through emits the milestone as soon as the
    base event fires.

Concurrency:
    Listeners on the same event start in declaration order and then run
    concurrently; each chain awaits its actions one after another. Two
    firings of the same event are not serialized and may interleave at
    action boundaries.
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from componentry.actions.base import ActionContext, BaseAction
from componentry.actions.factory import ActionFactory
from componentry.actions.providers.function import FunctionAction
from componentry.core.events import CREATE_EVENT, CREATED_EVENT, LOAD_EVENT, LOADED_EVENT
from componentry.errors import InvalidArgumentError, MisconfigurationError, wrap_action_error

if TYPE_CHECKING:
    from componentry.core.component import Component

# Base event -> milestone emitted once its chains resolve
MILESTONES: dict[str, str] = {
    CREATE_EVENT: CREATED_EVENT,
    LOAD_EVENT: LOADED_EVENT,
}


class ListenerSpec(BaseModel):
    """
    A declared listener: an event name and the ordered actions to run.

    Actions may be given as ``BaseAction`` instances, plain callables (wrapped
    in ``FunctionAction``) or mappings understood by ``ActionFactory``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    event: str = Field(min_length=1)
    actions: list[BaseAction] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def coerce_actions(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
            raise ValueError("actions must be a sequence")

        actions = []
        for item in value:
            if isinstance(item, BaseAction):
                actions.append(item)
            elif isinstance(item, Mapping):
                actions.append(ActionFactory.from_config(item))
            elif callable(item):
                actions.append(FunctionAction(item))
            else:
                raise ValueError(f"cannot use {type(item).__name__} as an action")
        return actions


def normalize_listeners(listeners: Any) -> list[ListenerSpec]:
    """
    Validate a ``listeners`` property value.

    Raises:
        InvalidArgumentError: If the value is not a sequence of listener declarations.
    """
    if listeners is None:
        return []
    if isinstance(listeners, (str, bytes, Mapping)) or not isinstance(listeners, Iterable):
        raise InvalidArgumentError(
            "listeners must be a sequence",
            details={"type": type(listeners).__name__},
        )

    specs = []
    for index, listener in enumerate(listeners):
        if isinstance(listener, ListenerSpec):
            specs.append(listener)
            continue
        try:
            specs.append(ListenerSpec.model_validate(listener))
        except (ValidationError, ValueError, TypeError) as e:
            raise InvalidArgumentError(
                f"listener #{index} is malformed",
                details={"listener": repr(listener)},
                original_error=e,
            ) from e
    return specs


class ListenerWiring:
    """Installs and tears down the subscriptions for one component."""

    def __init__(self, component: "Component", strict: bool = False):
        self._component = component
        self._strict = strict
        self._installed: list[tuple[str, Callable[..., Any]]] = []

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def subscribed_events(self) -> list[str]:
        """Events this wiring currently listens to, in installation order."""
        return list(dict.fromkeys(event for event, _ in self._installed))

    def wire(self, listeners: Iterable[ListenerSpec], if_data: Any = None) -> None:
        """
        Replace every subscription with the given listeners.

        Args:
            listeners: Validated listener declarations.
            if_data: Constant handed to every action as ``context.if_data``.

        Raises:
            MisconfigurationError: In strict mode, for a listener on an unknown event.
        """
        groups: dict[str, list[ListenerSpec]] = {}
        for listener in listeners:
            groups.setdefault(listener.event, []).append(listener)

        self.check_events(groups)
        self.teardown()

        for event, group in groups.items():
            self._install(event, partial(self._fire, event, tuple(group), if_data))

        self.install_defaults(skip=groups)
        logger.debug(
            f"Wired {sum(len(g) for g in groups.values())} listener(s) on "
            f"{self._component!r}: {list(groups)}"
        )

    def install_defaults(self, skip: Iterable[str] = ()) -> None:
        """Install the milestone pass-throughs for base events not in ``skip``."""
        skip = set(skip)
        for event, milestone in MILESTONES.items():
            if event not in skip:
                self._install(event, partial(self._component._emit_change, milestone))

    def teardown(self) -> None:
        """Remove every subscription installed by this wiring. Idempotent."""
        for event, handler in self._installed:
            self._component.off(event, handler)
        self._installed = []

    def _install(self, event: str, handler: Callable[..., Any]) -> None:
        self._component.on(event, handler)
        self._installed.append((event, handler))

    def check_events(self, events: Iterable[str]) -> None:
        """Flag listeners on events the component never emits.

        Raises:
            MisconfigurationError: In strict mode, for the first unknown event.
        """
        known = self._component.known_events()
        for event in events:
            if event in known:
                continue
            if self._strict:
                raise MisconfigurationError(
                    f"No emission path for event '{event}'",
                    details={"component": repr(self._component), "known_events": sorted(known)},
                )
            logger.debug(f"Listener on '{event}' will never fire for {self._component!r}")

    async def _fire(
        self,
        event: str,
        group: tuple[ListenerSpec, ...],
        if_data: Any,
        *args: Any,
    ) -> None:
        results = await asyncio.gather(
            *(self._run_chain(event, listener, if_data) for listener in group),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for failure in failures:
                logger.error(f"Listener chain for '{event}' on {self._component!r} failed: {failure}")
            raise failures[0]

        milestone = MILESTONES.get(event)
        if milestone is not None:
            await self._component._emit_change_async(milestone)

    async def _run_chain(self, event: str, listener: ListenerSpec, if_data: Any) -> Any:
        output = None
        for action in listener.actions:
            context = ActionContext(
                event=event,
                component=self._component,
                if_data=if_data,
                arguments=output,
            )
            try:
                output = await action.run(context)
            except Exception as e:
                raise wrap_action_error(e, event, action) from e
        return output
