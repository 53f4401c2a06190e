"""Temporal smoothing of sampled colors to suppress flicker."""

from collections.abc import Sequence
from typing import Optional

from ambiway.models import RawColor

# Weight of the previously emitted color in each blend (0.5 = plain average).
SMOOTHING_WEIGHT = 0.5

# Below this per-channel distance the blend snaps onto the target, so a
# constant input is reached exactly after a bounded number of cycles.
CONVERGENCE_EPSILON = 0.5


def smooth(previous: RawColor, raw: RawColor, enabled: bool) -> RawColor:
    """
    Blend a new sample with the previously emitted color.

    Args:
        previous: Color emitted for this LED on the last cycle
        raw: Newly sampled color
        enabled: When False, `raw` is returned unchanged

    Returns:
        The color to emit (and to remember for the next cycle)
    """
    if not enabled:
        return raw

    blended = RawColor(
        *(p * SMOOTHING_WEIGHT + n * (1.0 - SMOOTHING_WEIGHT) for p, n in zip(previous, raw))
    )
    if all(abs(b - n) < CONVERGENCE_EPSILON for b, n in zip(blended, raw)):
        return raw
    return blended


class Smoother:
    """
    Per-monitor smoothing state.

    Holds the last emitted color of every LED of one monitor. Owned by a
    single monitor worker; not thread-safe.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._state: Optional[list[RawColor]] = None

    def apply(self, raw: Sequence[RawColor]) -> tuple[RawColor, ...]:
        """
        Smooth one frame's samples and remember the result.

        The state is seeded with the first frame, so the first cycle
        emits the raw samples.
        """
        if self._state is None or len(self._state) != len(raw):
            self._state = list(raw)
            return tuple(raw)

        for i, color in enumerate(raw):
            self._state[i] = smooth(self._state[i], color, self.enabled)
        return tuple(self._state)
