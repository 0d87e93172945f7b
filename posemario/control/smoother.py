"""
Temporal smoothing of the tracked reference frame.

This module holds the dead-zone low-pass filter applied to the shoulder
midpoint and shoulder width, so the gesture zones stay still on a static pose
and glide toward the subject when they move.
"""

import logging
from typing import Optional

from posemario.config import SmoothingConfig
from posemario.control.types import ReferenceFrame

logger = logging.getLogger(__name__)


class DeadZoneFilter:
    """
    Exponential approach filter with a dead zone.

    Changes smaller than the jitter threshold are ignored entirely; larger
    changes move the output a fixed fraction of the remaining distance.
    """

    def __init__(self, jitter_threshold=None, alpha=None):
        """
        Initialize the filter.

        Args:
            jitter_threshold (float): Dead zone width. If None, uses config default.
            alpha (float): Fraction of the distance covered per update (0-1]. If None, uses config default.
        """
        self.jitter_threshold = (jitter_threshold if jitter_threshold is not None
                                 else SmoothingConfig.JITTER_THRESHOLD)
        self.alpha = alpha if alpha is not None else SmoothingConfig.SMOOTH_ALPHA

        if not 0.0 < self.alpha <= 1.0:
            raise ValueError(f"Smoothing alpha must be in (0, 1], got {self.alpha}")

    def update(self, current: float, raw: float) -> float:
        """
        Returns the next smoothed value.

        Args:
            current (float): Current smoothed value
            raw (float): New observation

        Returns:
            float: Next smoothed value
        """
        diff = raw - current
        if abs(diff) < self.jitter_threshold:
            return current
        return current + diff * self.alpha


class ReferenceSmoother:
    """
    Applies a DeadZoneFilter independently to origin x, origin y and scale.
    """

    def __init__(self, jitter_threshold=None, alpha=None):
        self.filter = DeadZoneFilter(jitter_threshold, alpha)
        self.value: Optional[ReferenceFrame] = None

    def reset(self, raw: ReferenceFrame) -> ReferenceFrame:
        """Snap to a raw reference frame (used when tracking starts)."""
        self.value = raw
        return raw

    def update(self, raw: ReferenceFrame) -> ReferenceFrame:
        if self.value is None:
            return self.reset(raw)

        f = self.filter.update
        self.value = ReferenceFrame(
            f(self.value.origin_x, raw.origin_x),
            f(self.value.origin_y, raw.origin_y),
            f(self.value.scale, raw.scale),
        )
        return self.value
