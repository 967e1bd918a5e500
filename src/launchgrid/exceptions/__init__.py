"""
Custom exception hierarchy for launchgrid.

## Exception Hierarchy

```
LaunchGridError (base)
├── RequestError (also ValueError)
│   ├── InvalidCoordinateError
│   ├── LengthMismatchError
│   └── OutOfRangeError
├── DeviceError
│   ├── DeviceNotConnectedError
│   └── TransportFailureError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `LaunchGridError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: clock out of range

```python
from launchgrid.exceptions import OutOfRangeError

try:
    controller.set_clock(250)
except OutOfRangeError as e:
    print(e.user_message)    # "bpm cannot be more than 240 (got 250)"
    print(e.recovery_hint)   # "Use a bpm between 40 and 240"
```

Discovery finding no Launchpad is not an error: it returns an empty list.
"""

from .base import LaunchGridError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceError, DeviceNotConnectedError, TransportFailureError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_transport_error,
)
from .request import InvalidCoordinateError, LengthMismatchError, OutOfRangeError, RequestError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceError",
    "DeviceNotConnectedError",
    "TransportFailureError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_transport_error",
    # Request
    "InvalidCoordinateError",
    "LengthMismatchError",
    "OutOfRangeError",
    "RequestError",
    # Base
    "LaunchGridError",
]
