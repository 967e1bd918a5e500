"""mido-backed MIDI ports."""

import logging
import threading
from collections.abc import Sequence
from typing import Any, Optional

import mido

from launchgrid.exceptions import TransportFailureError, wrap_transport_error

from .protocols import ControlChangeHandler, NoteHandler

logger = logging.getLogger(__name__)

SYSEX_START = 0xF0
SYSEX_END = 0xF7
# System Real-Time status bytes may appear anywhere, even inside SysEx
REALTIME_MIN = 0xF8


class MidoInputPort:
    """
    Input port opened with a mido callback.

    Messages arriving before ``start_receiving`` or after
    ``stop_receiving`` are dropped.
    """

    def __init__(self, name: str, api: Any = mido):
        """
        Initialize the port handle (does not open it).

        Args:
            name: MIDI port name
            api: mido module or a ``mido.Backend`` providing ``open_input``
        """
        self._name = name
        self._api = api
        self._port: Optional[mido.ports.BaseInput] = None
        self._note_handler: Optional[NoteHandler] = None
        self._cc_handler: Optional[ControlChangeHandler] = None
        self._receiving = threading.Event()

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_open(self) -> bool:
        return self._port is not None and not self._port.closed

    def open(self) -> None:
        """Open the port. Opening an open port is a no-op."""
        if self.is_open:
            return
        try:
            self._port = self._api.open_input(self._name, callback=self._midi_callback)
            logger.info(f"Opened MIDI input: {self._name}")
        except Exception as e:
            logger.error(f"Failed to open MIDI input {self._name}: {e}")
            raise wrap_transport_error(e, "open input", self._name) from e

    def close(self) -> None:
        self._receiving.clear()
        if self._port is None:
            return
        try:
            self._port.close()
            logger.info(f"Closed MIDI input: {self._name}")
        except Exception as e:
            logger.error(f"Error closing MIDI input {self._name}: {e}")
            raise wrap_transport_error(e, "close input", self._name) from e
        finally:
            self._port = None

    def on_note(self, handler: NoteHandler) -> None:
        self._note_handler = handler

    def on_control_change(self, handler: ControlChangeHandler) -> None:
        self._cc_handler = handler

    def start_receiving(self) -> None:
        self._receiving.set()

    def stop_receiving(self) -> None:
        self._receiving.clear()

    def _midi_callback(self, msg: mido.Message) -> None:
        """
        MIDI message callback - called from mido's internal I/O thread.

        Dispatches note and control change messages to the registered handlers.
        """
        if not self._receiving.is_set():
            return
        try:
            if msg.type == "note_on" and self._note_handler:
                self._note_handler(msg.note, msg.velocity)
            elif msg.type == "note_off" and self._note_handler:
                self._note_handler(msg.note, 0)
            elif msg.type == "control_change" and self._cc_handler:
                self._cc_handler(msg.control, msg.value)
        except Exception as e:
            logger.error(f"Error in MIDI input callback: {e}", exc_info=True)


class MidoOutputPort:
    """Output port sending note-ons and SysEx through mido."""

    def __init__(self, name: str, api: Any = mido):
        """
        Initialize the port handle (does not open it).

        Args:
            name: MIDI port name
            api: mido module or a ``mido.Backend`` providing ``open_output``
        """
        self._name = name
        self._api = api
        self._port: Optional[mido.ports.BaseOutput] = None
        self._port_lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_open(self) -> bool:
        return self._port is not None and not self._port.closed

    def open(self) -> None:
        """Open the port. Opening an open port is a no-op."""
        if self.is_open:
            return
        try:
            self._port = self._api.open_output(self._name)
            logger.info(f"Opened MIDI output: {self._name}")
        except Exception as e:
            logger.error(f"Failed to open MIDI output {self._name}: {e}")
            raise wrap_transport_error(e, "open output", self._name) from e

    def close(self) -> None:
        with self._port_lock:
            if self._port is None:
                return
            try:
                self._port.close()
                logger.info(f"Closed MIDI output: {self._name}")
            except Exception as e:
                logger.error(f"Error closing MIDI output {self._name}: {e}")
                raise wrap_transport_error(e, "close output", self._name) from e
            finally:
                self._port = None

    def send_note(self, channel: int, note: int, velocity: int) -> None:
        """Send a note-on on a 1-based channel."""
        try:
            message = mido.Message("note_on", channel=channel - 1, note=note, velocity=velocity)
        except (TypeError, ValueError) as e:
            raise wrap_transport_error(e, "send", self._name) from e
        self._send(message)

    def send_sysex(self, packet: Sequence[int]) -> None:
        """
        Send a complete SysEx packet.

        mido only carries 7-bit data inside a sysex message, so any System
        Real-Time bytes (0xF8-0xFF) in the packet are sent first as their
        own messages, the way they would be interleaved on the wire.
        """
        if len(packet) < 2 or packet[0] != SYSEX_START or packet[-1] != SYSEX_END:
            raise TransportFailureError(
                "send", port_name=self._name, original_error=f"not a SysEx packet: {list(packet)}"
            )

        body = packet[1:-1]
        data = [b for b in body if b < REALTIME_MIN]
        try:
            messages = [mido.Message.from_bytes([b]) for b in body if b >= REALTIME_MIN]
            messages.append(mido.Message("sysex", data=data))
        except (TypeError, ValueError) as e:
            raise wrap_transport_error(e, "send", self._name) from e

        for message in messages:
            self._send(message)

    def _send(self, message: mido.Message) -> None:
        with self._port_lock:
            if self._port is None:
                raise TransportFailureError("send", port_name=self._name, original_error="port not open")
            try:
                self._port.send(message)
            except Exception as e:
                logger.error(f"Error sending MIDI message to {self._name}: {e}")
                raise wrap_transport_error(e, "send", self._name) from e
