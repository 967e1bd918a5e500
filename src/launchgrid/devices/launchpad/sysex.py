"""
Low-level SysEx message builder for Launchpad devices.

SysEx framing
-------------

Every message this module builds is a complete packet::

    [0xF0, 0x00, 0x20, 0x29, 0x02, id] ++ payload ++ [0xF7]
     │     └──────┬──────┘  │    └─ 0x18 legacy, 0x0D Mini MK3
     │         Novation      └─ SysEx command type
     Start of SysEx

Packets are returned as ``list[int]``; the transport decides how to put
them on the wire.

Commands
--------

=========  ===============================================  ==================
Opcode     Payload                                          Builder
=========  ===============================================  ==================
0x03       ``(3, note, r, g, b)`` per cell                  ``led_lighting``
0x07       ``loop, speed, 0, velocity, text`` (Mini MK3)    ``text_scroll_mk3``
0x07       ``loop, speed, 1, r, g, b, text`` (Mini MK3)     ``text_scroll_mk3_rgb``
0x0A       ``103 + x, velocity`` (top row, legacy)          ``top_led``
0x0E       ``mode`` (0 live, 1 programmer)                  ``set_mode``
0x14       ``velocity, loop, speed, text`` (legacy)         ``text_scroll``
0xF8       nothing (clock pulse)                            ``clock_pulse``
=========  ===============================================  ==================

Example RGB message
-------------------

Light note 81 (top-left pad) red on a Mini MK3::

    [0xF0, 0x00, 0x20, 0x29, 0x02, 0x0D, 0x03, 3, 81, 127, 0, 0, 0xF7]
                                          │    │  │   └─ r, g, b (0-127)
                                          │    │  └─ note
                                          │    └─ RGB lighting tag
                                          └─ LED lighting command

Single LED set/flash/pulse is not SysEx: it is a note-on on channel 1/2/3.

Data bytes (velocity, speed, r/g/b) must fit in 7 bits; anything outside
0-127 raises OutOfRangeError rather than being masked.
"""

import logging
from collections.abc import Iterable, Sequence

from launchgrid.exceptions import InvalidCoordinateError, LengthMismatchError, OutOfRangeError
from launchgrid.models.color import Color
from launchgrid.models.leds import LaunchpadMode, LightingMode

from .mapper import CoordinateMap

logger = logging.getLogger(__name__)

SYSEX_END = 0xF7
CLOCK = 0xF8

CMD_LED_LIGHTING = 0x03
CMD_TEXT_SCROLL_MK3 = 0x07
CMD_TOP_LED = 0x0A
CMD_SET_MODE = 0x0E
CMD_TEXT_SCROLL = 0x14

TOP_LED_BASE = 103

MIN_BPM = 40
MAX_BPM = 240
# MIDI clock runs at 24 pulses per quarter note
PULSES_PER_BEAT = 24
CLOCK_BURST = 11


def check_data_byte(field: str, value: int) -> int:
    """Reject values that do not fit a MIDI data byte."""
    if not 0 <= value <= 127:
        raise OutOfRangeError(field, value, 0, 127)
    return value


def clock_interval(bpm: int) -> float:
    """
    Seconds between two clock pulses at the given tempo.

    The exact quotient is kept; it is not truncated to whole milliseconds
    (240 bpm gives 10.42 ms, not 10 ms).

    Raises:
        OutOfRangeError: If bpm is outside [40, 240]
    """
    if not MIN_BPM <= bpm <= MAX_BPM:
        raise OutOfRangeError("bpm", bpm, MIN_BPM, MAX_BPM)
    return 60.0 / (PULSES_PER_BEAT * bpm)


def ascii_bytes(text: str) -> list[int]:
    """Encode text for scrolling, dropping characters outside 7-bit ASCII."""
    encoded = [ord(ch) for ch in text if ord(ch) < 128]
    if len(encoded) != len(text):
        logger.debug(f"Dropped {len(text) - len(encoded)} non-ASCII character(s) from {text!r}")
    return encoded


class LaunchpadSysEx:
    """SysEx packet builder bound to one device header."""

    def __init__(self, header: Sequence[int]):
        """
        Initialize with SysEx header.

        Args:
            header: The 6 header bytes, starting with 0xF0
        """
        self.header = list(header)

    def _packet(self, *payload: int) -> list[int]:
        return [*self.header, *payload, SYSEX_END]

    def set_mode(self, mode: LaunchpadMode) -> list[int]:
        """Build the live/programmer mode switch."""
        return self._packet(CMD_SET_MODE, int(mode))

    def top_led(self, x: int, velocity: int) -> list[int]:
        """
        Build a legacy top-row LED update.

        Args:
            x: Top-row position, 1-8
            velocity: Palette velocity (0-127)
        """
        if not 1 <= x <= 8:
            raise InvalidCoordinateError("top row", x)
        check_data_byte("velocity", velocity)
        return self._packet(CMD_TOP_LED, TOP_LED_BASE + x, velocity)

    def led_lighting(self, cells: Iterable[tuple[int, Color]]) -> list[int]:
        """
        Build an RGB LED lighting message.

        Args:
            cells: (note, color) pairs. ``note`` is the device note, not a
                   logical coordinate.
        """
        data = [CMD_LED_LIGHTING]
        for note, color in cells:
            data.extend((LightingMode.RGB.value, note, color.r, color.g, color.b))
        return self._packet(*data)

    def mass_update(self, xs: Sequence[int], ys: Sequence[int], color: Color) -> list[int]:
        """
        Build one lighting message setting every (xs[i], ys[i]) to ``color``.

        Coordinates are in the extended 9x9 space (see CoordinateMap).

        Raises:
            LengthMismatchError: If xs and ys differ in length
            InvalidCoordinateError: If a coordinate is outside the 9x9 space
        """
        if len(xs) != len(ys):
            raise LengthMismatchError(len(xs), len(ys))
        notes = [CoordinateMap.device_identity_for_coords(x, y) for x, y in zip(xs, ys)]
        return self.led_lighting((note, color) for note in notes)

    def text_scroll(self, text: str, speed: int, loop: bool, velocity: int) -> list[int]:
        """Build a legacy text scroll message."""
        check_data_byte("velocity", velocity)
        check_data_byte("speed", speed)
        return self._packet(CMD_TEXT_SCROLL, velocity, int(loop), speed, *ascii_bytes(text))

    def text_scroll_mk3(self, text: str, speed: int, loop: bool, velocity: int) -> list[int]:
        """Build a Mini MK3 text scroll message using a palette color."""
        check_data_byte("velocity", velocity)
        check_data_byte("speed", speed)
        return self._packet(CMD_TEXT_SCROLL_MK3, int(loop), speed, 0, velocity, *ascii_bytes(text))

    def text_scroll_mk3_rgb(self, text: str, speed: int, loop: bool, color: Color) -> list[int]:
        """Build a Mini MK3 text scroll message using an RGB color."""
        check_data_byte("speed", speed)
        return self._packet(
            CMD_TEXT_SCROLL_MK3, int(loop), speed, 1, color.r, color.g, color.b, *ascii_bytes(text)
        )

    def stop_text_scroll(self, legacy: bool) -> list[int]:
        """Build the message that stops a running text scroll."""
        return self._packet(CMD_TEXT_SCROLL if legacy else CMD_TEXT_SCROLL_MK3)

    def clock_pulse(self) -> list[int]:
        """Build one clock pulse packet."""
        return self._packet(CLOCK)
