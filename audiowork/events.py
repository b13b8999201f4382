"""
audiowork.events - Named publish/subscribe channel sequencing pipeline stages.

Listeners are plain callables keyed by event name. Removing by name drops
every listener for that name; removing by name and callable drops one.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from audiowork.logging import logger

DECODED = "decoded"
ENCODED = "encoded"
ERROR = "error"

EVENT_NAMES = frozenset({DECODED, ENCODED, ERROR})

Listener = Callable[[Any], None]


class EventChannel:
    """Thread-safe registry of listeners keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._lock = threading.Lock()

    def _check_name(self, name: str) -> None:
        if name not in EVENT_NAMES:
            raise ValueError(f"Unknown event: {name!r} (expected one of {sorted(EVENT_NAMES)})")

    def on(self, name: str, listener: Listener) -> Listener:
        """Register a listener and return it."""
        self._check_name(name)
        with self._lock:
            self._listeners.setdefault(name, []).append(listener)
        return listener

    def off(self, name: str, listener: Listener | None = None) -> None:
        """Remove one listener, or all listeners for name when listener is None."""
        self._check_name(name)
        with self._lock:
            if listener is None:
                self._listeners.pop(name, None)
                return
            listeners = self._listeners.get(name, [])
            if listener in listeners:
                listeners.remove(listener)

    def emit(self, name: str, payload: Any = None) -> int:
        """Deliver payload to every listener for name.

        Listeners run on the calling thread, outside the registry lock, so a
        listener may register or remove listeners. A listener that raises is
        logged and skipped.

        Returns:
            Number of listeners invoked
        """
        self._check_name(name)
        with self._lock:
            listeners = list(self._listeners.get(name, []))

        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for %r event failed", name)
        return len(listeners)

    def listener_count(self, name: str) -> int:
        with self._lock:
            return len(self._listeners.get(name, []))

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()
