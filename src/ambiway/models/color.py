"""Color models for sampled and emitted LED colors."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawColor(NamedTuple):
    """Unclamped mean RGB of a sampled region (floats, nominally 0-255)."""

    r: float
    g: float
    b: float


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    This is what gets sent to the lighting controller. Values are already
    clamped by the brightness scaler.

    The model is frozen so sequences of colors can be published between
    threads as immutable snapshots.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @field_validator("r", "g", "b")
    @classmethod
    def validate_rgb(cls, v: int) -> int:
        """Ensure RGB values are in valid range."""
        if not 0 <= v <= 255:
            raise ValueError("RGB values must be between 0 and 255")
        return v

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Example:
            >>> Color(r=255, g=0, b=0).to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


LedSequence = tuple[Color, ...]


def black_sequence(length: int) -> LedSequence:
    """All-off sequence of the given LED count."""
    off = Color.off()
    return tuple(off for _ in range(length))
