"""
Subject tracking with hysteresis.

Tracking starts only when a detection is large enough and close to the
horizontal center of the frame, and stops only when the shoulder width drops
below a smaller loss threshold. The gap between the two thresholds keeps the
state from flickering when the subject stands near the boundary.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from posemario.config import PoseConfig, TrackingConfig
from posemario.control.types import ReferenceFrame
from posemario.detection.keypoints import LEFT_SHOULDER, RIGHT_SHOULDER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackingUpdate:
    """
    Result of feeding one frame to the tracker.
    """

    is_tracking: bool
    acquired: bool = False
    "Tracking started on this frame."
    lost: bool = False
    "Tracking stopped on this frame."


def measure_shoulders(keypoints: Optional[np.ndarray], frame_width: int,
                      confidence_threshold: Optional[float] = None) -> Optional[ReferenceFrame]:
    """
    Compute the raw reference frame from the shoulder keypoints.

    Args:
        keypoints: (17, 3) array of x, y, confidence in pixels, or None
        frame_width (int): Width of the frame the keypoints refer to
        confidence_threshold (float): Minimum shoulder confidence. If None, uses config default.

    Returns:
        ReferenceFrame or None: None when the shoulders are not detected
    """
    if keypoints is None or frame_width <= 0:
        return None
    threshold = confidence_threshold if confidence_threshold is not None else PoseConfig.CONFIDENCE_THRESHOLD

    left = keypoints[LEFT_SHOULDER]
    right = keypoints[RIGHT_SHOULDER]
    if left[2] < threshold or right[2] < threshold:
        return None

    mid_x = float(left[0] + right[0]) * 0.5
    mid_y = float(left[1] + right[1]) * 0.5
    scale = float(np.hypot(left[0] - right[0], left[1] - right[1]))
    return ReferenceFrame(mid_x, mid_y, scale)


class SubjectTracker:
    """
    Decides frame to frame whether a subject is being tracked.
    """

    def __init__(self, acquire_scale_min=None, lose_scale_min=None, center_tolerance=None):
        self.acquire_scale_min = (acquire_scale_min if acquire_scale_min is not None
                                  else TrackingConfig.ACQUIRE_SCALE_MIN)
        self.lose_scale_min = lose_scale_min if lose_scale_min is not None else TrackingConfig.LOSE_SCALE_MIN
        self.center_tolerance = (center_tolerance if center_tolerance is not None
                                 else TrackingConfig.CENTER_TOLERANCE)

        if self.lose_scale_min >= self.acquire_scale_min:
            raise ValueError(
                f"Loss threshold ({self.lose_scale_min}) must be below "
                f"acquisition threshold ({self.acquire_scale_min})"
            )

        self.is_tracking = False

    def update(self, raw_scale: float, center_offset: float) -> TrackingUpdate:
        """
        Feed one frame's measurement.

        Args:
            raw_scale (float): Unsmoothed shoulder width, 0 when nothing was detected
            center_offset (float): Shoulder midpoint offset from the frame center,
                as a fraction of the frame width

        Returns:
            TrackingUpdate: New state and whether it changed on this frame
        """
        if not self.is_tracking:
            if raw_scale > self.acquire_scale_min and abs(center_offset) < self.center_tolerance:
                self.is_tracking = True
                logger.info(f"Subject acquired (scale {raw_scale:.1f}px, offset {center_offset:+.2f})")
                return TrackingUpdate(True, acquired=True)
            return TrackingUpdate(False)

        if raw_scale < self.lose_scale_min:
            self.is_tracking = False
            logger.info(f"Subject lost (scale {raw_scale:.1f}px)")
            return TrackingUpdate(False, lost=True)
        return TrackingUpdate(True)

    def reset(self):
        """Forget the tracked subject."""
        self.is_tracking = False
