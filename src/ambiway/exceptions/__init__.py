"""
Custom exception hierarchy for ambiway.

## Exception Hierarchy

```
AmbiwayError (base)
├── ConfigurationError          fatal, reported before the loop starts
│   ├── ConfigFileInvalidError
│   ├── ConfigValidationError
│   └── LayoutError
├── CaptureError                per monitor, never crosses a monitor boundary
│   ├── CaptureTimeout          transient, retried next cycle
│   ├── CaptureFailure          persistent, worker enters FAILED
│   └── FrameShapeMismatch      skipped, escalated when repeated
└── ControllerError
    ├── ControllerConnectionError
    └── ControllerUpdateFailure per tick, logged, loop continues
```

All exceptions carry `user_message`, `technical_message`, `recoverable`
and `recovery_hint`. See `ambiway.exceptions.handlers` for utilities to
handle these exceptions systematically.
"""

from .base import AmbiwayError
from .capture import CaptureError, CaptureFailure, CaptureTimeout, FrameShapeMismatch
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    LayoutError,
)
from .controller import ControllerConnectionError, ControllerError, ControllerUpdateFailure
from .handlers import (
    ErrorCollector,
    ErrorContext,
    collect_errors,
    format_error_for_display,
    wrap_openrgb_error,
    wrap_pydantic_error,
)

__all__ = [
    # Base
    "AmbiwayError",
    # Capture
    "CaptureError",
    "CaptureFailure",
    "CaptureTimeout",
    "FrameShapeMismatch",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "LayoutError",
    # Controller
    "ControllerConnectionError",
    "ControllerError",
    "ControllerUpdateFailure",
    # Handlers
    "ErrorCollector",
    "ErrorContext",
    "collect_errors",
    "format_error_for_display",
    "wrap_openrgb_error",
    "wrap_pydantic_error",
]
