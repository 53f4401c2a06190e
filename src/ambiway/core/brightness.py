"""Brightness scaling of sampled colors into 8-bit LED colors."""

import math
from collections.abc import Iterable

from ambiway.models import Color, LedSequence, RawColor


def _channel(value: float, factor: float) -> int:
    scaled = value * factor
    if not scaled > 0.0:
        # Also catches NaN from an empty region
        return 0
    if scaled >= 255.0:
        return 255
    return int(math.floor(scaled + 0.5))


def scale(color: RawColor, brightness_factor: float) -> Color:
    """
    Multiply each channel and clamp to 0-255.

    Rounds half up, so 0.25 * 200 -> 50 and 0.5 * 101 -> 51. A factor of
    zero or below yields black.
    """
    if brightness_factor <= 0:
        return Color.off()
    return Color(
        r=_channel(color.r, brightness_factor),
        g=_channel(color.g, brightness_factor),
        b=_channel(color.b, brightness_factor),
    )


def scale_sequence(colors: Iterable[RawColor], brightness_factor: float) -> LedSequence:
    """Scale a whole monitor's colors."""
    return tuple(scale(color, brightness_factor) for color in colors)
