"""Enumerations for Launchpad LEDs, lighting and device families.

Wire numbers for the top row and the side column are only reachable
through ``.note`` / ``from_note()``; callers address LEDs by name or index.

Layout (wire notes)::

    91  92  93  94  95  96  97  98 | 99   <- top row (TopLED)
    81  82  83  84  85  86  87  88 | 89   <- side column (SideLED)
    71  72  ...                 78 | 79
    ...
    11  12  ...                 18 | 19
"""

from enum import Enum, IntEnum
from typing import Optional, TypeAlias


class TopLED(IntEnum):
    """Top row function keys and the logo LED."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    SESSION = 4
    DRUMS = 5
    KEYS = 6
    USER = 7
    LOGO = 8

    @property
    def note(self) -> int:
        """Wire number (91-99)."""
        return 91 + self.value

    @classmethod
    def from_note(cls, note: int) -> Optional["TopLED"]:
        """Reverse lookup, None when the note is not on the top row."""
        if 91 <= note <= 99:
            return cls(note - 91)
        return None


class SideLED(IntEnum):
    """Right-hand column, indexed top to bottom."""

    S0 = 0
    S1 = 1
    S2 = 2
    S3 = 3
    S4 = 4
    S5 = 5
    S6 = 6
    S7 = 7

    @property
    def note(self) -> int:
        """Wire number (89, 79, ..., 19)."""
        return 89 - 10 * self.value

    @classmethod
    def from_note(cls, note: int) -> Optional["SideLED"]:
        """Reverse lookup, None when the note is not in the side column."""
        if 19 <= note <= 89 and note % 10 == 9:
            return cls((89 - note) // 10)
        return None


LedId: TypeAlias = TopLED | SideLED


class LightingMode(IntEnum):
    """How an LED is lit.

    SET, FLASH and PULSE pick the MIDI channel (1, 2, 3) of a note-on.
    RGB tags a cell inside the LED lighting SysEx.
    """

    SET = 0
    FLASH = 1
    PULSE = 2
    RGB = 3

    @property
    def channel(self) -> int:
        """MIDI channel (1-based) used for note-on updates."""
        if self is LightingMode.RGB:
            raise ValueError("RGB lighting is sent as SysEx, not as a note-on")
        return self.value + 1


class LaunchpadMode(IntEnum):
    """Device operating mode."""

    LIVE = 0
    PROGRAMMER = 1


class DeviceFamily(str, Enum):
    """Supported Launchpad hardware generations."""

    LEGACY = "legacy"  # single shared port name
    MINI_MK3 = "mini_mk3"  # separate MIDIIN/MIDIOUT ports

    @property
    def sysex_header(self) -> tuple[int, ...]:
        """Novation SysEx header for this family."""
        device_id = 0x18 if self is DeviceFamily.LEGACY else 0x0D
        return (0xF0, 0x00, 0x20, 0x29, 0x02, device_id)

    @property
    def display_name(self) -> str:
        return "Launchpad (legacy)" if self is DeviceFamily.LEGACY else "Launchpad Mini MK3"
