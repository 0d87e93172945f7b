"""
Body keypoint topology shared by all pose backends.

Keypoints are exchanged as a (17, 3) float array of x, y (pixels in the
captured frame) and confidence, in COCO joint order.
"""

import numpy as np

NUM_KEYPOINTS = 17

NOSE = 0
LEFT_EYE = 1
RIGHT_EYE = 2
LEFT_EAR = 3
RIGHT_EAR = 4
LEFT_SHOULDER = 5
RIGHT_SHOULDER = 6
LEFT_ELBOW = 7
RIGHT_ELBOW = 8
LEFT_WRIST = 9
RIGHT_WRIST = 10
LEFT_HIP = 11
RIGHT_HIP = 12
LEFT_KNEE = 13
RIGHT_KNEE = 14
LEFT_ANKLE = 15
RIGHT_ANKLE = 16

WRISTS = (LEFT_WRIST, RIGHT_WRIST)

# Joint pairs drawn as the skeleton
SKELETON = (
    (0, 1), (0, 2), (1, 3), (2, 4),
    (5, 6), (5, 7), (7, 9), (6, 8), (8, 10),
    (5, 11), (6, 12), (11, 12),
    (11, 13), (13, 15), (12, 14), (14, 16),
)


def empty_keypoints():
    """
    Returns a keypoint array with every joint undetected.
    """
    return np.zeros((NUM_KEYPOINTS, 3), dtype=np.float32)


def validate_keypoints(keypoints):
    """
    Check that a pose backend returned the expected layout.

    Raises:
        ValueError: If the array does not have shape (17, 3)
    """
    arr = np.asarray(keypoints, dtype=np.float32)
    if arr.shape != (NUM_KEYPOINTS, 3):
        raise ValueError(f"Expected keypoints of shape ({NUM_KEYPOINTS}, 3), got {arr.shape}")
    return arr
