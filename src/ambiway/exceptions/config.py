"""Configuration-related exceptions.

This module defines exceptions for configuration errors:
- ConfigurationError: Base class for configuration errors (fatal at startup)
- ConfigFileInvalidError: Config file has invalid syntax
- ConfigValidationError: Config values fail validation
- LayoutError: LED/indent geometry does not fit the frame
"""

from typing import Any, Optional

from .base import AmbiwayError


class ConfigurationError(AmbiwayError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid TOML or JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid config file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common syntax errors:\n"
        recovery += "  - Unquoted strings\n"
        recovery += "  - Unclosed brackets in lists\n"
        recovery += "  - Duplicate keys or tables\n"
        recovery += f"  - Edit: {file_path}"

        if "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"
            recovery = f"Run 'ambiway config init' to write a starter config to {file_path}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        if "cams" in field.lower() or "zone" in field.lower():
            recovery += (
                "\nEvery per-monitor list (cams, zone_id_list, led.*, indent.*) "
                "needs one entry per monitor"
            )
        elif "device_id" in field.lower():
            recovery += "\nRun 'ambiway controller list' to see valid device and zone IDs"
        elif "size" in field.lower():
            recovery += "\nThe sampling depth must be a positive number of pixels"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.field = field
        self.value = value
        self.file_path = file_path


class LayoutError(ConfigurationError):
    """LED counts, indents or region size do not fit the monitor frame."""

    def __init__(self, monitor_index: int, reason: str, edge: Optional[str] = None):
        """
        Initialize layout error.

        Args:
            monitor_index: Position of the monitor in the configured camera list
            reason: What is wrong with the geometry
            edge: Edge name involved (if applicable)
        """
        where = f"monitor {monitor_index}"
        if edge:
            where += f", {edge} edge"

        super().__init__(
            user_message=f"Invalid LED layout for {where}: {reason}",
            technical_message=f"Layout computation failed ({where}): {reason}",
            recoverable=False,
            recovery_hint=(
                "Reduce the indents for this edge or check the capture resolution.\n"
                "Run 'ambiway regions' to preview the computed sampling regions"
            ),
        )
        self.monitor_index = monitor_index
        self.edge = edge
        self.reason = reason
