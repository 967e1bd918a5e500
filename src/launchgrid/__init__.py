"""launchgrid - Novation Launchpad grid control over MIDI."""

from launchgrid.devices.launchpad import LaunchpadController
from launchgrid.models import Color, LaunchpadDevice, LaunchpadMode, SideLED, TopLED
from launchgrid.protocols import CCKeyEvent, KeyEvent, LaunchpadEvent

__version__ = "0.1.0"

__all__ = [
    "CCKeyEvent",
    "Color",
    "KeyEvent",
    "LaunchpadController",
    "LaunchpadDevice",
    "LaunchpadEvent",
    "LaunchpadMode",
    "SideLED",
    "TopLED",
    "__version__",
]
