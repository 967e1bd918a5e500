"""Exceptions for malformed requests made by the caller.

These are contract violations on the caller's side, so they also derive
from ValueError:
- RequestError: Base class for bad arguments
- InvalidCoordinateError: Coordinate or note outside the mapped domain
- LengthMismatchError: Mass-update x and y lists differ in length
- OutOfRangeError: Numeric argument outside its allowed range
"""

from .base import LaunchGridError


class RequestError(LaunchGridError, ValueError):
    """A request to the device was malformed."""
    pass


class InvalidCoordinateError(RequestError):
    """Coordinate lookup outside the mapped domain."""

    def __init__(self, kind: str, value: object):
        """
        Initialize invalid coordinate error.

        Args:
            kind: What was being looked up ("grid", "side", "top row", ...)
            value: The offending coordinate, index or note
        """
        super().__init__(
            user_message=f"Invalid {kind} coordinate: {value}",
            technical_message=f"No {kind} mapping for {value!r}",
            recovery_hint="Grid coordinates are 0-7 on both axes, side LEDs 0-7, top row 1-8",
        )
        self.kind = kind
        self.value = value


class LengthMismatchError(RequestError):
    """Coordinate lists of a mass update have different lengths."""

    def __init__(self, xs_count: int, ys_count: int):
        """
        Initialize length mismatch error.

        Args:
            xs_count: Number of x coordinates given
            ys_count: Number of y coordinates given
        """
        super().__init__(
            user_message=f"Count of xs ({xs_count}) and ys ({ys_count}) does not match",
            recovery_hint="Pass one y coordinate for every x coordinate",
        )
        self.xs_count = xs_count
        self.ys_count = ys_count


class OutOfRangeError(RequestError):
    """Numeric argument outside its allowed range."""

    def __init__(self, field: str, value: int, minimum: int, maximum: int):
        """
        Initialize out of range error.

        Args:
            field: Name of the argument
            value: The rejected value
            minimum: Smallest allowed value (inclusive)
            maximum: Largest allowed value (inclusive)
        """
        if value < minimum:
            user_msg = f"{field} cannot be less than {minimum} (got {value})"
        else:
            user_msg = f"{field} cannot be more than {maximum} (got {value})"

        super().__init__(
            user_message=user_msg,
            technical_message=f"{field}={value} outside [{minimum}, {maximum}]",
            recoverable=True,
            recovery_hint=f"Use a {field} between {minimum} and {maximum}",
        )
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
