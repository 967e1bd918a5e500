"""Key events and listener management.

- Events: grid and function-key events raised by Launchpad input
- ListenerList: thread-safe per-event listener registry
"""

from .events import CCKeyEvent, KeyEvent, LaunchpadEvent
from .listeners import ListenerList

__all__ = [
    "CCKeyEvent",
    "KeyEvent",
    "LaunchpadEvent",
    "ListenerList",
]
