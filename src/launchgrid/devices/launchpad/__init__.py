"""Novation Launchpad support (legacy and Mini MK3 class devices)."""

from .connection import Connection, ConnectionManager, ConnectionState
from .controller import LaunchpadController
from .discovery import DeviceDiscovery
from .dispatcher import EventDispatcher
from .mapper import CoordinateMap
from .sysex import CLOCK_BURST, LaunchpadSysEx, clock_interval

__all__ = [
    "CLOCK_BURST",
    "Connection",
    "ConnectionManager",
    "ConnectionState",
    "CoordinateMap",
    "DeviceDiscovery",
    "EventDispatcher",
    "LaunchpadController",
    "LaunchpadSysEx",
    "clock_interval",
]
