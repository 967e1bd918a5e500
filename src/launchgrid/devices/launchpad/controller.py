"""Launchpad controller."""

import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, Optional

from pydantic import ValidationError

from launchgrid.exceptions import OutOfRangeError, TransportFailureError, handle_errors
from launchgrid.midi.backend import MidoBackend
from launchgrid.midi.protocols import MidiBackend
from launchgrid.models.color import Color
from launchgrid.models.config import DiscoveryConfig
from launchgrid.models.device import LaunchpadDevice
from launchgrid.models.leds import LaunchpadMode, LedId, LightingMode, SideLED, TopLED
from launchgrid.protocols.events import LaunchpadEvent

from .connection import Connection, ConnectionManager
from .discovery import DeviceDiscovery
from .dispatcher import EventDispatcher
from .mapper import CoordinateMap
from .sysex import CLOCK_BURST, LaunchpadSysEx, check_data_byte, clock_interval

logger = logging.getLogger(__name__)


def led_update(operation_name: str) -> Callable:
    """Log transport failures of an LED update and return False instead of raising."""
    return handle_errors(
        operation_name=operation_name,
        catch=(TransportFailureError,),
        re_raise=False,
        fallback_value=False,
    )


class LaunchpadController:
    """
    High-level Launchpad controller.

    Composes discovery, the connection manager, the SysEx builder and the
    event dispatcher into one user-facing API::

        with LaunchpadController() as launchpad:
            devices = launchpad.list_connected_devices()
            launchpad.connect(devices[0])
            launchpad.set_mode(LaunchpadMode.PROGRAMMER)
            launchpad.add_listener(LaunchpadEvent.KEY_DOWN, on_key)
            launchpad.set_led(3, 4, 21)

    LED updates log transport failures and return False. Mode, text
    scroll and clock operations let TransportFailureError propagate.
    Every output operation raises DeviceNotConnectedError when no device
    is connected.
    """

    def __init__(
        self,
        backend: Optional[MidiBackend] = None,
        discovery_config: Optional[DiscoveryConfig] = None,
    ):
        """
        Initialize Launchpad controller.

        Args:
            backend: MIDI backend (defaults to mido)
            discovery_config: Port matching rules for discovery
        """
        self._backend = backend or MidoBackend()
        self._discovery = DeviceDiscovery(self._backend, discovery_config)
        self._dispatcher = EventDispatcher()
        self._connections = ConnectionManager(self._backend, self._dispatcher)
        self._mode_as_set: Optional[LaunchpadMode] = None

    # Connection

    def list_connected_devices(self) -> list[LaunchpadDevice]:
        """Discover attached Launchpads, sorted by input port name."""
        return self._discovery.discover()

    def connect(self, device: LaunchpadDevice) -> bool:
        self._mode_as_set = None
        return self._connections.connect(device)

    def disconnect(self, device: LaunchpadDevice) -> bool:
        return self._connections.disconnect(device)

    @property
    def is_connected(self) -> bool:
        return self._connections.is_connected

    @property
    def is_legacy(self) -> bool:
        connection = self._connections.connection
        return connection is not None and connection.is_legacy

    @property
    def connection(self) -> Optional[Connection]:
        return self._connections.connection

    @property
    def mode_as_set(self) -> Optional[LaunchpadMode]:
        """Last mode sent with set_mode on this connection (None if never set)."""
        return self._mode_as_set

    # Listeners

    def add_listener(self, kind: LaunchpadEvent, listener: Callable[[Any], Any]) -> None:
        """
        Register a listener for one kind of key event.

        Note:
            Listeners run on the MIDI receive thread and should return quickly.
        """
        self._dispatcher.add_listener(kind, listener)

    def remove_listener(self, kind: LaunchpadEvent, listener: Callable[[Any], Any]) -> None:
        self._dispatcher.remove_listener(kind, listener)

    def listener_count(self, kind: LaunchpadEvent) -> int:
        return self._dispatcher.listener_count(kind)

    # Coordinates

    @staticmethod
    def grid_to_note(x: int, y: int) -> int:
        return CoordinateMap.grid_to_note(x, y)

    @staticmethod
    def note_to_grid(note: int) -> Optional[tuple[int, int]]:
        return CoordinateMap.note_to_grid(note)

    @staticmethod
    def note_to_side_led(note: int) -> Optional[int]:
        return CoordinateMap.side_for_note(note)

    # Single LEDs (note-on)

    @led_update("set LED")
    def set_led(self, x: int, y: int, velocity: int) -> bool:
        """Light grid pad (x, y) with a palette velocity."""
        return self._send_note(LightingMode.SET, CoordinateMap.note_for_grid(x, y), velocity)

    @led_update("flash LED")
    def set_led_flash(self, x: int, y: int, velocity: int) -> bool:
        return self._send_note(LightingMode.FLASH, CoordinateMap.note_for_grid(x, y), velocity)

    @led_update("pulse LED")
    def set_led_pulse(self, x: int, y: int, velocity: int) -> bool:
        return self._send_note(LightingMode.PULSE, CoordinateMap.note_for_grid(x, y), velocity)

    @led_update("set side LED")
    def set_side_led(self, led: SideLED | int, velocity: int) -> bool:
        """Light a side LED, addressed by SideLED or index (0 = top)."""
        return self._send_note(LightingMode.SET, CoordinateMap.note_for_side(int(led)), velocity)

    @led_update("flash side LED")
    def set_side_led_flash(self, led: SideLED | int, velocity: int) -> bool:
        return self._send_note(LightingMode.FLASH, CoordinateMap.note_for_side(int(led)), velocity)

    @led_update("pulse side LED")
    def set_side_led_pulse(self, led: SideLED | int, velocity: int) -> bool:
        return self._send_note(LightingMode.PULSE, CoordinateMap.note_for_side(int(led)), velocity)

    @led_update("set top LED")
    def set_top_led(self, led: TopLED, velocity: int) -> bool:
        return self._send_note(LightingMode.SET, CoordinateMap.note_for_top(led), velocity)

    @led_update("flash top LED")
    def set_top_led_flash(self, led: TopLED, velocity: int) -> bool:
        return self._send_note(LightingMode.FLASH, CoordinateMap.note_for_top(led), velocity)

    @led_update("pulse top LED")
    def set_top_led_pulse(self, led: TopLED, velocity: int) -> bool:
        return self._send_note(LightingMode.PULSE, CoordinateMap.note_for_top(led), velocity)

    @led_update("set function LED")
    def set_function_led(self, led: LedId, velocity: int, mode: LightingMode = LightingMode.SET) -> bool:
        """
        Light a top row or side column LED.

        Args:
            led: TopLED or SideLED member (plain ints are ambiguous and rejected)
            velocity: Palette velocity
            mode: SET, FLASH or PULSE
        """
        return self._send_note(LightingMode(mode), CoordinateMap.note_for_led(led), velocity)

    @led_update("set top LEDs")
    def set_top_leds(self, x: int, velocity: int) -> bool:
        """Light top-row position x (1-8) using the legacy SysEx command."""
        connection, sysex = self._require("set top LEDs")
        connection.output_port.send_sysex(sysex.top_led(x, velocity))
        return True

    # Ranges

    def fill_top_leds(self, start_x: int, end_x: int, velocity: int) -> bool:
        """Light top-row positions start_x..end_x (inclusive, clipped to 1-8)."""
        results = [self.set_top_leds(x, velocity) for x in range(1, 9) if start_x <= x <= end_x]
        return all(results)

    def fill_side_leds(self, start_y: int, end_y: int, velocity: int) -> bool:
        """Light side LEDs start_y..end_y (inclusive, clipped to 0-7)."""
        results = [self.set_side_led(y, velocity) for y in range(8) if start_y <= y <= end_y]
        return all(results)

    def fill_leds(self, start_x: int, start_y: int, end_x: int, end_y: int, velocity: int) -> bool:
        """Light a rectangle of grid pads (inclusive, clipped to the grid)."""
        results = [
            self.set_led(x, y, velocity)
            for x in range(CoordinateMap.GRID_SIZE)
            for y in range(CoordinateMap.GRID_SIZE)
            if start_x <= x <= end_x and start_y <= y <= end_y
        ]
        return all(results)

    # RGB (SysEx LED lighting, extended 9x9 coordinates)

    @led_update("set RGB LED")
    def set_led_rgb(self, x: int, y: int, r: int, g: int, b: int) -> bool:
        """Set one cell of the extended 9x9 space to an RGB color."""
        color = self._color(r, g, b)
        connection, sysex = self._require("set RGB LED")
        note = CoordinateMap.device_identity_for_coords(x, y)
        connection.output_port.send_sysex(sysex.led_lighting([(note, color)]))
        return True

    @led_update("mass update LEDs")
    def mass_update_leds(self, xs: Iterable[int], ys: Iterable[int], r: int, g: int = 0, b: int = 0) -> bool:
        """Set every (xs[i], ys[i]) of the extended 9x9 space to one color in a single message."""
        color = self._color(r, g, b)
        connection, sysex = self._require("mass update LEDs")
        connection.output_port.send_sysex(sysex.mass_update(list(xs), list(ys), color))
        return True

    def mass_update_rectangle(
        self, start_x: int, start_y: int, end_x: int, end_y: int, r: int, g: int = 0, b: int = 0
    ) -> bool:
        """Mass update every cell of an inclusive rectangle."""
        xs: list[int] = []
        ys: list[int] = []
        for x in range(start_x, end_x + 1):
            for y in range(start_y, end_y + 1):
                xs.append(x)
                ys.append(y)
        return self.mass_update_leds(xs, ys, r, g, b)

    def clear_all_leds(self) -> bool:
        """Turn off every LED: grid, side column, top row and logo."""
        return self.mass_update_rectangle(0, 0, 8, 8, 0, 0, 0)

    # Device commands

    def set_mode(self, mode: LaunchpadMode) -> None:
        """Switch between live and programmer mode."""
        mode = LaunchpadMode(mode)
        connection, sysex = self._require("set mode")
        connection.output_port.send_sysex(sysex.set_mode(mode))
        self._mode_as_set = mode
        logger.info(f"Mode set to {mode.name.lower()}")

    def create_text_scroll(
        self,
        text: str,
        speed: int,
        loop: bool,
        velocity: int,
        rgb: Optional[Color | tuple[int, int, int]] = None,
    ) -> None:
        """
        Scroll text across the grid.

        Args:
            text: Text to scroll; characters outside 7-bit ASCII are dropped
            speed: Scroll speed (0-127)
            loop: Repeat until stop_text_scroll is called
            velocity: Palette velocity of the text
            rgb: RGB color of the text (Mini MK3 only; legacy devices use velocity)
        """
        connection, sysex = self._require("scroll text")
        if connection.is_legacy:
            if rgb is not None:
                logger.warning("RGB text scroll is not supported on legacy Launchpads, using velocity")
            packet = sysex.text_scroll(text, speed, loop, velocity)
        elif rgb is not None:
            color = rgb if isinstance(rgb, Color) else self._color(*rgb)
            packet = sysex.text_scroll_mk3_rgb(text, speed, loop, color)
        else:
            packet = sysex.text_scroll_mk3(text, speed, loop, velocity)
        connection.output_port.send_sysex(packet)

    def stop_text_scroll(self) -> None:
        connection, sysex = self._require("stop text scroll")
        connection.output_port.send_sysex(sysex.stop_text_scroll(connection.is_legacy))

    def set_clock(self, bpm: int) -> None:
        """
        Send a burst of 11 clock pulses at the given tempo.

        Blocks the calling thread for 11 pulse intervals.

        Raises:
            OutOfRangeError: If bpm is outside [40, 240]
        """
        interval = clock_interval(bpm)
        connection, sysex = self._require("send clock")
        packet = sysex.clock_pulse()
        logger.debug(f"Sending {CLOCK_BURST} clock pulses at {bpm} bpm ({interval * 1000:.2f} ms apart)")
        for _ in range(CLOCK_BURST):
            connection.output_port.send_sysex(packet)
            time.sleep(interval)

    # Lifecycle

    def close(self) -> None:
        """Disconnect the current device and drop every listener."""
        connection = self._connections.connection
        if connection is not None:
            self._connections.disconnect(connection.device)
        self._dispatcher.clear()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    # Internals

    def _require(self, operation: str) -> tuple[Connection, LaunchpadSysEx]:
        connection = self._connections.require_connection(operation)
        return connection, LaunchpadSysEx(connection.sysex_header)

    def _send_note(self, mode: LightingMode, note: int, velocity: int) -> bool:
        check_data_byte("velocity", velocity)
        connection = self._connections.require_connection(f"{mode.name.lower()} LED")
        connection.output_port.send_note(mode.channel, note, velocity)
        return True

    @staticmethod
    def _color(r: int, g: int, b: int) -> Color:
        """Build a device color, reporting the first bad channel as OutOfRangeError."""
        try:
            return Color(r=r, g=g, b=b)
        except ValidationError as e:
            error = e.errors()[0]
            value = error.get("input")
            if not isinstance(value, int):
                raise
            field = str(error["loc"][0]) if error.get("loc") else "color"
            raise OutOfRangeError(field, value, 0, 127) from e
