"""
Property Store.

Named-value storage with change detection. Values live in one explicit dict
keyed by property name; only an enumerated set of recognized names can be
stored or read.
"""

from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger


class _Unset:
    """Marker for a property that has never been assigned."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET = _Unset()


def is_change(current: Any, value: Any) -> bool:
    """Decide whether assigning ``value`` over ``current`` is a real change.

    Equal values of the same type are not a change. Going from never-assigned
    to ``None`` is not a change either, while going from a defined value to
    ``None`` is.
    """
    if current is UNSET:
        return value is not None
    if current is value:
        return False
    # 1 -> True and 0 -> 0.0 are changes
    if type(current) is not type(value):
        return True
    try:
        return bool(current != value)
    except (TypeError, ValueError):
        # Values whose comparison is ambiguous are compared by identity
        return True


class PropertyStore:
    """
    Explicit keyed property map with change notification.

    The store notifies through a single callback, ``notify(name, value)``,
    whenever an assignment is a real change (see :func:`is_change`).

    Example:
        store = PropertyStore(["name", "passed"], notify=emitter._emit_change)
        store.assign("name", "first")   # notifies
        store.assign("name", "first")   # no-op
        store.read("passed")            # None, never touched
    """

    def __init__(
        self,
        names: Iterable[str],
        notify: Callable[[str, Any], Any] | None = None,
    ):
        self._names: tuple[str, ...] = tuple(dict.fromkeys(names))
        self._values: dict[str, Any] = {}
        self._notify = notify

    @property
    def names(self) -> tuple[str, ...]:
        """Recognized property names, in declaration order."""
        return self._names

    def recognizes(self, name: str) -> bool:
        return name in self._names

    def is_set(self, name: str) -> bool:
        """True once the property has been assigned, even if assigned None."""
        return name in self._values

    def assign(self, name: str, value: Any) -> bool:
        """
        Store a value, notifying if it is a real change.

        Args:
            name: Property name.
            value: New value.

        Returns:
            True if the value changed and a notification was sent.
        """
        if not self.recognizes(name):
            logger.debug(f"Ignoring unrecognized property '{name}'")
            return False

        current = self._values.get(name, UNSET)
        if not is_change(current, value):
            return False

        self._values[name] = value
        if self._notify is not None:
            self._notify(name, value)
        return True

    def push(self, name: str, value: Any) -> bool:
        """Append to a list-valued property.

        A new list is stored on every push so that listeners see a change.
        """
        values = self._values.get(name)
        values = list(values) if isinstance(values, list) else []
        values.append(value)
        return self.assign(name, values)

    def read(self, name: str) -> Any:
        """Read a value; unset and unrecognized names read as None."""
        return self._values.get(name)

    def snapshot(self, names: Iterable[str] | None = None) -> dict[str, Any]:
        """Return a dict of the requested names (all recognized names by default)."""
        if names is None:
            names = self._names
        return {name: self.read(name) if self.recognizes(name) else None for name in names}

    def values(self) -> dict[str, Any]:
        """Shallow copy of the assigned values."""
        return dict(self._values)

    def load(self, values: dict[str, Any]) -> None:
        """Replace stored values without notifying. Used when cloning."""
        self._values = {k: v for k, v in values.items() if self.recognizes(k)}

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"<PropertyStore(names={list(self._names)}, set={list(self._values)})>"
