"""
Identity Keys.

Components receive an opaque integer key once, at the end of construction.
Keys come from an explicitly owned ``KeyGenerator``; components that share a
generator never share a key.
"""

import threading

from componentry.config.settings import settings


class KeyGenerator:
    """
    Thread-safe monotonically increasing key counter.

    Example:
        keys = KeyGenerator()
        keys.next_key()  # 0
        keys.next_key()  # 1
    """

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next_key(self) -> int:
        """Issue the next key. Keys are never reused."""
        with self._lock:
            key = self._next
            self._next += 1
        return key

    def peek(self) -> int:
        """The key the next call to ``next_key()`` will return."""
        with self._lock:
            return self._next

    def __repr__(self) -> str:
        return f"<KeyGenerator(next={self._next})>"


_default_generator: KeyGenerator | None = None
_default_lock = threading.Lock()


def default_key_generator() -> KeyGenerator:
    """Process-wide generator used by components built without one."""
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = KeyGenerator(start=settings.KEY_START)
        return _default_generator
