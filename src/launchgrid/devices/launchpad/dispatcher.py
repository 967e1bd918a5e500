"""Classification of inbound Launchpad messages into key events."""

import logging
from collections.abc import Callable
from typing import Any

from launchgrid.protocols.events import CCKeyEvent, KeyEvent, LaunchpadEvent
from launchgrid.protocols.listeners import ListenerList

from .mapper import CoordinateMap

logger = logging.getLogger(__name__)

VELOCITY_UP = 0
VELOCITY_DOWN = 127


class EventDispatcher:
    """
    Routes note and control change traffic to per-event listener lists.

    ::

        note (grid)   ─► KeyEvent(x, y)          ─► KEY_PRESSED (+ KEY_UP / KEY_DOWN)
        note (side)   ─► CCKeyEvent(index, True) ─► CC_KEY_PRESSED (+ CC_KEY_UP / CC_KEY_DOWN)
        control change ─► CCKeyEvent(control)    ─► CC_KEY_PRESSED (+ CC_KEY_UP / CC_KEY_DOWN)

    Velocity/value 0 adds the "up" event, 127 adds the "down" event, any
    other value only the "pressed" event.

    ``handle_note`` and ``handle_control_change`` run on the MIDI receive
    thread while listeners may be added or removed from any thread.
    """

    def __init__(self) -> None:
        self._listeners: dict[LaunchpadEvent, ListenerList] = {
            kind: ListenerList(kind.value) for kind in LaunchpadEvent
        }

    def add_listener(self, kind: LaunchpadEvent, listener: Callable[[Any], Any]) -> None:
        self._listeners[kind].add(listener)

    def remove_listener(self, kind: LaunchpadEvent, listener: Callable[[Any], Any]) -> None:
        self._listeners[kind].remove(listener)

    def listener_count(self, kind: LaunchpadEvent) -> int:
        return len(self._listeners[kind])

    def clear(self) -> None:
        """Remove every listener of every kind."""
        for listeners in self._listeners.values():
            listeners.clear()

    def handle_note(self, note: int, velocity: int) -> None:
        """Classify a note-on (note-off arrives as velocity 0)."""
        side_index = CoordinateMap.side_for_note(note)
        if side_index is not None:
            self._emit_cc(CCKeyEvent(side_index, from_note=True), velocity)
            return

        cell = CoordinateMap.grid_for_note(note)
        if cell is None:
            logger.debug(f"Ignoring note {note} (velocity {velocity}): not a grid pad")
            return

        event = KeyEvent(*cell)
        self._listeners[LaunchpadEvent.KEY_PRESSED].dispatch(event)
        if velocity == VELOCITY_UP:
            self._listeners[LaunchpadEvent.KEY_UP].dispatch(event)
        elif velocity == VELOCITY_DOWN:
            self._listeners[LaunchpadEvent.KEY_DOWN].dispatch(event)

    def handle_control_change(self, control: int, value: int) -> None:
        """Classify a control change (top row keys)."""
        self._emit_cc(CCKeyEvent(control), value)

    def _emit_cc(self, event: CCKeyEvent, value: int) -> None:
        self._listeners[LaunchpadEvent.CC_KEY_PRESSED].dispatch(event)
        if value == VELOCITY_UP:
            self._listeners[LaunchpadEvent.CC_KEY_UP].dispatch(event)
        elif value == VELOCITY_DOWN:
            self._listeners[LaunchpadEvent.CC_KEY_DOWN].dispatch(event)
