"""Connection lifecycle for a single Launchpad."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from launchgrid.exceptions import DeviceNotConnectedError, ErrorContext, TransportFailureError
from launchgrid.midi.protocols import MidiBackend, MidiInput, MidiOutput
from launchgrid.models.device import LaunchpadDevice

from .dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@dataclass
class Connection:
    """
    An opened device.

    Header and legacy flag are fixed when the connection is made and never
    change afterwards. Only ConnectionManager mutates a Connection.
    """

    device: LaunchpadDevice
    sysex_header: tuple[int, ...]
    is_legacy: bool
    input_port: Optional[MidiInput] = None
    output_port: Optional[MidiOutput] = None
    connected: bool = False
    state: ConnectionState = field(default=ConnectionState.DISCONNECTED)

    @property
    def both_open(self) -> bool:
        return bool(
            self.input_port and self.input_port.is_open
            and self.output_port and self.output_port.is_open
        )

    @property
    def both_closed(self) -> bool:
        input_open = self.input_port is not None and self.input_port.is_open
        output_open = self.output_port is not None and self.output_port.is_open
        return not input_open and not output_open


class ConnectionManager:
    """
    Opens and closes the ports of one Launchpad.

    State machine::

        DISCONNECTED ──connect()──► CONNECTING ──both ports open──► CONNECTED
              ▲                          │                              │
              └──── one side failed ─────┘                              │
              └──────────────────────── disconnect() ───────────────────┘

    A half-open connection (only one port opened) is closed again and
    reported as not connected.

    Threading:
        connect/disconnect must be called from a single thread.
        ``is_connected`` may be read from any thread.
    """

    def __init__(self, backend: MidiBackend, dispatcher: EventDispatcher):
        self._backend = backend
        self._dispatcher = dispatcher
        self._connection: Optional[Connection] = None

    @property
    def connection(self) -> Optional[Connection]:
        return self._connection

    @property
    def is_connected(self) -> bool:
        connection = self._connection
        return connection is not None and connection.connected

    def require_connection(self, operation: str) -> Connection:
        """
        Return the open connection.

        Raises:
            DeviceNotConnectedError: If no device is connected
        """
        connection = self._connection
        if connection is None or not connection.connected:
            raise DeviceNotConnectedError(operation)
        return connection

    def connect(self, device: LaunchpadDevice) -> bool:
        """
        Open the device's ports and start receiving input.

        Args:
            device: Device returned by discovery

        Returns:
            True if both ports are open
        """
        if self.is_connected:
            logger.info(f"Closing {self._connection.device.name} before connecting {device.name}")
            self.disconnect(self._connection.device)

        family = device.family
        connection = Connection(
            device=device,
            sysex_header=family.sysex_header,
            is_legacy=device.is_legacy,
            state=ConnectionState.CONNECTING,
        )
        self._connection = connection
        logger.info(f"Connecting to {device.describe()}")

        with ErrorContext(
            f"connect {device.name}", logger, re_raise=False, catch=(TransportFailureError,)
        ):
            input_name = self._match_name(device.input_port_name, self._backend.input_names())
            output_name = self._match_name(device.output_port_name, self._backend.output_names())

            if input_name is None:
                logger.error(f"MIDI input not found: {device.input_port_name}")
            else:
                connection.input_port = self._backend.input_port(input_name)
                connection.input_port.open()
                connection.input_port.on_note(self._dispatcher.handle_note)
                connection.input_port.on_control_change(self._dispatcher.handle_control_change)
                connection.input_port.start_receiving()

            if output_name is None:
                logger.error(f"MIDI output not found: {device.output_port_name}")
            else:
                connection.output_port = self._backend.output_port(output_name)
                connection.output_port.open()

        connection.connected = connection.both_open
        if connection.connected:
            connection.state = ConnectionState.CONNECTED
            logger.info(f"Connected to {device.name} ({family.display_name})")
        else:
            logger.warning(f"Could not open both ports of {device.name}, closing")
            self._close_ports(connection)
            connection.state = ConnectionState.DISCONNECTED

        return connection.connected

    def disconnect(self, device: LaunchpadDevice) -> bool:
        """
        Stop receiving and close both ports.

        Calling it on a closed connection is a no-op.

        Returns:
            True when both ports are closed
        """
        connection = self._connection
        if connection is None or connection.device != device:
            logger.debug(f"{device.name} is not connected, nothing to disconnect")
            return True

        if connection.both_open:
            self._close_ports(connection)
            logger.info(f"Disconnected from {device.name}")

        connection.connected = False
        closed = connection.both_closed
        if closed:
            connection.state = ConnectionState.DISCONNECTED
        return closed

    def _close_ports(self, connection: Connection) -> None:
        if connection.input_port is not None:
            connection.input_port.stop_receiving()
            if connection.input_port.is_open:
                with ErrorContext(
                    f"close {connection.input_port.name}", logger, re_raise=False,
                    catch=(TransportFailureError,),
                ):
                    connection.input_port.close()

        if connection.output_port is not None and connection.output_port.is_open:
            with ErrorContext(
                f"close {connection.output_port.name}", logger, re_raise=False,
                catch=(TransportFailureError,),
            ):
                connection.output_port.close()

    @staticmethod
    def _match_name(wanted: str, available: list[str]) -> Optional[str]:
        """Find a port by case-insensitive name."""
        wanted_lower = wanted.lower()
        return next((name for name in available if name.lower() == wanted_lower), None)
