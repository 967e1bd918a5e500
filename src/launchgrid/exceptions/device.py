"""Device-related exceptions.

This module defines exceptions for device and transport errors:
- DeviceError: Base class for device errors
- DeviceNotConnectedError: Operation needs an open connection
- TransportFailureError: The MIDI transport raised while sending or receiving
"""

from .base import LaunchGridError


class DeviceError(LaunchGridError):
    """Launchpad device operation failed."""

    def __init__(self, user_message: str, port_name: str | None = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            port_name: The MIDI port involved (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.port_name = port_name


class DeviceNotConnectedError(DeviceError):
    """An operation was attempted without an open connection."""

    def __init__(self, operation: str):
        """
        Initialize device-not-connected error.

        Args:
            operation: Name of the operation that needed a connection
        """
        super().__init__(
            user_message=f"Cannot {operation}: no Launchpad connected.",
            recoverable=True,
            recovery_hint="Run 'launchgrid devices' to see detected Launchpads, then connect first.",
        )
        self.operation = operation


class TransportFailureError(DeviceError):
    """The underlying MIDI transport failed."""

    def __init__(self, operation: str, port_name: str | None = None, original_error: str | None = None):
        """
        Initialize transport failure error.

        Args:
            operation: What the transport was doing ("send", "open", ...)
            port_name: The MIDI port involved
            original_error: The original error message from the MIDI library
        """
        user_msg = f"MIDI {operation} failed"
        if port_name:
            user_msg += f" on '{port_name}'"
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            port_name=port_name,
            recoverable=True,
            recovery_hint="Check that the Launchpad is plugged in and not used by another application.",
        )
        self.operation = operation
        self.original_error = original_error
