"""Transport protocols used by the Launchpad layer.

Anything that provides these methods can stand in for the mido
implementation, which keeps discovery and connection logic testable
without hardware.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

NoteHandler = Callable[[int, int], None]
"""Called with (note, velocity). Note-off arrives as velocity 0."""

ControlChangeHandler = Callable[[int, int], None]
"""Called with (control, value)."""


@runtime_checkable
class MidiInput(Protocol):
    """Receiving side of a MIDI port."""

    @property
    def name(self) -> str: ...

    @property
    def is_open(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    def on_note(self, handler: NoteHandler) -> None: ...

    def on_control_change(self, handler: ControlChangeHandler) -> None: ...

    def start_receiving(self) -> None:
        """
        Begin delivering messages to the registered handlers.

        Note:
            Handlers are called from the transport's receive thread.
        """
        ...

    def stop_receiving(self) -> None: ...


@runtime_checkable
class MidiOutput(Protocol):
    """Sending side of a MIDI port."""

    @property
    def name(self) -> str: ...

    @property
    def is_open(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    def send_note(self, channel: int, note: int, velocity: int) -> None:
        """
        Send a note-on.

        Args:
            channel: 1-based MIDI channel
            note: Note number (0-127)
            velocity: Velocity (0-127)

        Raises:
            TransportFailureError: If the port rejects the message
        """
        ...

    def send_sysex(self, packet: Sequence[int]) -> None:
        """
        Send a complete SysEx packet (0xF0 ... 0xF7).

        Raises:
            TransportFailureError: If the port rejects the message
        """
        ...


@runtime_checkable
class MidiBackend(Protocol):
    """Enumerates ports and creates (unopened) port handles."""

    def input_names(self) -> list[str]: ...

    def output_names(self) -> list[str]: ...

    def input_port(self, name: str) -> MidiInput: ...

    def output_port(self, name: str) -> MidiOutput: ...

    def list_ports(self) -> tuple[list[str], list[str]]:
        """Return (input names, output names)."""
        ...
