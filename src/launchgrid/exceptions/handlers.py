"""
Centralized error handling utilities.

## Quick Reference

| Scenario | Use This | Example |
|----------|----------|---------|
| Pad outside the grid | `InvalidCoordinateError` | `raise InvalidCoordinateError("grid", (9, 0))` |
| xs/ys lists differ | `LengthMismatchError` | `raise LengthMismatchError(3, 2)` |
| BPM too high | `OutOfRangeError` | `raise OutOfRangeError("bpm", 241, 40, 240)` |
| No open connection | `DeviceNotConnectedError` | `raise DeviceNotConnectedError("set mode")` |
| mido raised on send | `TransportFailureError` | `raise wrap_transport_error(e, "send", port)` |

### Handling Patterns

| Pattern | Code |
|---------|------|
| Log transport failures, continue | `@handle_errors(operation_name="set LED", catch=(TransportFailureError,), re_raise=False, fallback_value=False)` |
| Log and re-raise | `@handle_errors(operation_name="connect", re_raise=True)` |
| Log transport failures in a block, continue | `with ErrorContext("open ports", re_raise=False, catch=(TransportFailureError,)): ...` |

## Layers

```
┌─────────────────────────────────────┐
│  CLI                                │
│  - format_error_for_display()       │
└─────────────────────────────────────┘
                  ↑ LaunchGridError
┌─────────────────────────────────────┐
│  LaunchpadController / Connection   │
│  - validates requests               │
│  - logs and drops LED send failures │
└─────────────────────────────────────┘
                  ↑ TransportFailureError
┌─────────────────────────────────────┐
│  midi/ (mido ports)                 │
│  - wraps OSError, ValueError, ...   │
└─────────────────────────────────────┘
```
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from .base import LaunchGridError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import TransportFailureError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    catch: tuple[type[BaseException], ...] = (Exception,),
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Only exceptions matching ``catch`` are handled; anything else
    propagates untouched, so request errors raised by validation are
    never swallowed by a decorator meant for transport failures.

    Args:
        operation_name: Name of the operation for logging (e.g., "set LED")
        catch: Exception types handled by this decorator
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(
            operation_name="set LED",
            catch=(TransportFailureError,),
            re_raise=False,
            fallback_value=False,
        )
        def set_led(self, x, y, velocity):
            ...
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except catch as e:
                if isinstance(e, LaunchGridError):
                    logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")
                else:
                    logger.log(
                        log_level,
                        f"Unexpected error during {operation_name}: {e}",
                        exc_info=True
                    )

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext(
            "open Launchpad ports",
            re_raise=False,
            catch=(TransportFailureError,),
        ) as ctx:
            port.open()

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True,
        catch: tuple[type[BaseException], ...] = (Exception,)
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise handled exceptions
            catch: Exception types this context handles; anything else
                   propagates untouched
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.catch = catch
        self.error: Optional[Exception] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        if not isinstance(exc_val, self.catch):
            return False

        self.error = exc_val

        if isinstance(exc_val, LaunchGridError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_transport_error(
    error: Exception, operation: str, port_name: Optional[str] = None
) -> TransportFailureError:
    """
    Convert a low-level MIDI library error into a TransportFailureError.

    Args:
        error: The original exception raised by mido / the MIDI backend
        operation: What was being attempted ("send", "open", "close")
        port_name: The port involved

    Returns:
        TransportFailureError carrying the original message
    """
    if isinstance(error, TransportFailureError):
        return error
    return TransportFailureError(operation, port_name=port_name, original_error=str(error))


def wrap_pydantic_error(error: Exception, file_path: str) -> LaunchGridError:
    """
    Convert Pydantic validation errors to launchgrid exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LaunchGridError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
