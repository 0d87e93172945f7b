"""
Detection Module - Body keypoints and pose estimation backends.

This module provides:
- The 17-joint keypoint layout shared by every backend (keypoints.py)
- MoveNet (onnxruntime) and MediaPipe pose backends (pose_source.py)

pose_source.py is imported on demand because it loads the model runtimes.
"""

from .keypoints import (
    LEFT_SHOULDER,
    LEFT_WRIST,
    NUM_KEYPOINTS,
    RIGHT_SHOULDER,
    RIGHT_WRIST,
    SKELETON,
    WRISTS,
    empty_keypoints,
    validate_keypoints,
)

__all__ = [
    'LEFT_SHOULDER',
    'LEFT_WRIST',
    'NUM_KEYPOINTS',
    'RIGHT_SHOULDER',
    'RIGHT_WRIST',
    'SKELETON',
    'WRISTS',
    'empty_keypoints',
    'validate_keypoints',
]
