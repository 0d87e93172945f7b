import pytest

from posemario.control.keys import KeyDispatcher
from posemario.detection.keypoints import LEFT_SHOULDER, RIGHT_SHOULDER, empty_keypoints

FRAME_WIDTH = 1280
FRAME_HEIGHT = 720


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingDispatcher(KeyDispatcher):
    """Dispatcher that records every key event."""

    def __init__(self):
        self.events = []

    def press(self, key):
        self.events.append(("press", key))

    def release(self, key):
        self.events.append(("release", key))

    def presses(self, key=None):
        return [k for op, k in self.events if op == "press" and (key is None or k == key)]

    def releases(self, key=None):
        return [k for op, k in self.events if op == "release" and (key is None or k == key)]


def make_keypoints(mid=(FRAME_WIDTH / 2, FRAME_HEIGHT / 2), scale=40.0, shoulder_conf=1.0, wrists=None):
    """
    Build a (17, 3) keypoint array with level shoulders.

    Args:
        mid (tuple): Shoulder midpoint in pixels
        scale (float): Shoulder width in pixels
        shoulder_conf (float): Confidence of both shoulders
        wrists (dict): keypoint index -> (nx, ny, confidence) in shoulder units
    """
    keypoints = empty_keypoints()
    keypoints[LEFT_SHOULDER] = (mid[0] - scale / 2, mid[1], shoulder_conf)
    keypoints[RIGHT_SHOULDER] = (mid[0] + scale / 2, mid[1], shoulder_conf)
    for idx, (nx, ny, conf) in (wrists or {}).items():
        keypoints[idx] = (mid[0] + nx * scale, mid[1] + ny * scale, conf)
    return keypoints


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()
