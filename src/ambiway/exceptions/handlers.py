"""
Centralized error handling utilities.

This module provides a layered approach to error handling:

1. **Custom Exceptions** - Typed, user-friendly error classes (see base, config,
   capture and controller modules)
2. **Error Context** - Preserve technical details for logging, show friendly messages to users
3. **Recovery Hints** - Tell users what to do when things fail
4. **Error Isolation** - One monitor's failure shouldn't cascade to the others

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Config file syntax error | `ConfigFileInvalidError(path, "expected '='")` |
| Config value invalid | `ConfigValidationError("settings.size", 0, "must be positive")` |
| Indents larger than the screen | `LayoutError(monitor_index=0, reason="...", edge="left")` |
| No frame in time | `CaptureTimeout(camera_id=2, timeout=1.0)` |
| OpenRGB rejected colors | `wrap_openrgb_error(e, device_id=0, zone_id=1)` |

| Pattern | Code |
|---------|------|
| Try several ops, collect errors | `collector = collect_errors("open cameras"); with collector.try_operation(...): ...` |
| Critical section with auto-logging | `with ErrorContext("start workers"): ...` |

## Architecture

```
CLI          formats user_message / recovery_hint, exits non-zero
  ^ AmbiwayError
App/Core     converts low-level errors, isolates per-monitor failures
  ^ Exception, OSError, cv2.error, ...
Libraries    OpenCV, openrgb-python, pydantic, tomllib
```
"""

import logging
from typing import Optional

from .base import AmbiwayError
from .config import ConfigFileInvalidError, ConfigValidationError
from .controller import ControllerConnectionError, ControllerUpdateFailure


logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("open capture devices") as ctx:
            source.open()

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, AmbiwayError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> AmbiwayError:
    """
    Convert Pydantic validation errors to ambiway exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            if len(errors) == 1:
                first_error = errors[0]
                loc = first_error.get('loc') or ('config',)
                field = ".".join(str(part) for part in loc)
                reason = first_error.get('msg', 'validation failed')
                # Cross-field checks raise ValueError, which pydantic prefixes
                reason = reason.removeprefix("Value error, ")
                value = first_error.get('input', None)

                return ConfigValidationError(
                    field=field,
                    value=value,
                    error_msg=reason,
                    file_path=file_path
                )

            error_lines = []
            for err in errors:
                loc = err.get('loc') or ('config',)
                field = ".".join(str(part) for part in loc)
                msg = err.get('msg', 'validation failed').removeprefix("Value error, ")
                error_lines.append(f"  - {field}: {msg}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def wrap_openrgb_error(
    error: Exception,
    device_id: int,
    zone_id: int,
    address: Optional[str] = None,
) -> AmbiwayError:
    """
    Convert low-level OpenRGB client errors to ambiway exceptions.

    Lost connections are reported as connection errors; everything else is
    a per-tick update failure the loop can recover from.

    Args:
        error: The original exception from openrgb-python or the socket layer
        device_id: Controller device index
        zone_id: Zone being updated
        address: host:port of the server (for connection errors)

    Returns:
        An AmbiwayError with appropriate type and message
    """
    error_msg = str(error) or type(error).__name__

    if isinstance(error, (ConnectionError, BrokenPipeError)) or "disconnected" in error_msg.lower():
        return ControllerConnectionError(
            address or "unknown",
            original_error=error_msg,
            device_id=device_id,
            zone_id=zone_id,
        )

    return ControllerUpdateFailure(device_id, zone_id, error_msg)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, AmbiwayError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Example:
        ```python
        collector = collect_errors("open cameras")

        for source in sources:
            with collector.try_operation(f"open camera {source.camera_id}"):
                source.open()

        if collector.has_errors:
            raise CaptureFailure(None, collector.get_summary())
        ```

    Args:
        operation: Description of the overall operation

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def try_operation(self, sub_operation: str):
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation

        Returns:
            Context manager that catches and stores errors
        """
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """
        Get a summary of collected errors.

        Returns:
            Multi-line summary string
        """
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = f"Failed {self.error_count} of {self.error_count + self.success_count} operations:\n"
        for sub_op, error in self.errors:
            if isinstance(error, AmbiwayError):
                summary += f"  - {sub_op}: {error.user_message}\n"
            else:
                summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            logger.debug(f"{self.collector.operation}: {self.sub_operation} failed: {exc_val}")
            self.collector.errors.append((self.sub_operation, exc_val))
            return True
