"""Key events raised by Launchpad input.

Events are delivered on the MIDI receive thread.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from launchgrid.models.leds import SideLED, TopLED


class LaunchpadEvent(Enum):
    """Kinds of key event a listener can subscribe to."""

    KEY_PRESSED = "key_pressed"        # any grid note (press or release)
    KEY_DOWN = "key_down"              # grid note with velocity 127
    KEY_UP = "key_up"                  # grid note with velocity 0
    CC_KEY_PRESSED = "cc_key_pressed"  # any top-row CC or side note
    CC_KEY_DOWN = "cc_key_down"        # value/velocity 127
    CC_KEY_UP = "cc_key_up"            # value/velocity 0


@dataclass(frozen=True)
class KeyEvent:
    """Grid pad event, in the same (x, y) space as ``set_led``."""

    x: int
    y: int


@dataclass(frozen=True)
class CCKeyEvent:
    """Function key event.

    ``raw_value`` is the CC control number for top-row keys, or the side
    index (0-7) when ``from_note`` is True.
    """

    raw_value: int
    from_note: bool = False

    @property
    def top_led(self) -> Optional[TopLED]:
        if self.from_note:
            return None
        return TopLED.from_note(self.raw_value)

    @property
    def side_led(self) -> Optional[SideLED]:
        if self.from_note:
            if 0 <= self.raw_value <= 7:
                return SideLED(self.raw_value)
            return None
        return SideLED.from_note(self.raw_value)
