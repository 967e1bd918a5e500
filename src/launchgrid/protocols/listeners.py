"""Thread-safe listener list.

Registration, unregistration and dispatch of plain callables, used once per
event kind by the dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)


E = TypeVar("E", bound=object)


class ListenerList(Generic[E]):
    """
    Listener list with thread-safe registration and notification.

    Listeners are called with a single event argument. Registration happens
    on the caller's thread while dispatch happens on the MIDI receive thread,
    so every dispatch works on a snapshot taken under the lock.

    Example:
        ```python
        presses = ListenerList[KeyEvent]("key_pressed")
        presses.add(lambda event: print(event.x, event.y))
        presses.dispatch(KeyEvent(3, 4))
        ```
    """

    def __init__(self, name: str = "listener", lock: Lock | None = None):
        """
        Initialize the listener list.

        Args:
            name: Name used in log messages (e.g., "key_pressed")
            lock: Optional threading lock to use. If None, creates a new lock.
        """
        self._listeners: list[Callable[[E], Any]] = []
        self._lock = lock or Lock()
        self._name = name

    def add(self, listener: Callable[[E], Any]) -> None:
        """Register a listener (idempotent - won't add duplicates)."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)
                logger.debug(f"Added {self._name} listener: {listener}")
            else:
                logger.debug(f"{self._name} listener already added: {listener}")

    def remove(self, listener: Callable[[E], Any]) -> None:
        """Unregister a listener. Unknown listeners are logged and ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                logger.debug(f"Removed {self._name} listener: {listener}")
            else:
                logger.warning(f"Attempted to remove unknown {self._name} listener: {listener}")

    def dispatch(self, event: E) -> None:
        """
        Call every listener with the event.

        The lock is held only to copy the list, so listeners may add or
        remove listeners while being called. Exceptions in a listener are
        logged and do not stop delivery to the others.
        """
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(
                    f"Error in {self._name} listener {listener} for {event}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all registered listeners."""
        with self._lock:
            count = len(self._listeners)
            self._listeners.clear()
            if count > 0:
                logger.debug(f"Cleared {count} {self._name} listener(s)")

    def __contains__(self, listener: object) -> bool:
        with self._lock:
            return listener in self._listeners

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def __bool__(self) -> bool:
        with self._lock:
            return len(self._listeners) > 0
