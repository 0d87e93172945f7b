from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

import numpy as np

Color = Tuple[int, int, int]


class KeyId(Enum):
    """
    Virtual keys the controller can hold down.
    """

    FORWARD = "forward"
    BACK = "back"
    SPRINT = "sprint"
    JUMP = "jump"
    DUCK = "duck"


class Action(Enum):
    """
    Horizontal movement derived from the wrist positions.
    """

    NEUTRAL = "NEUTRAL"
    RUN = "RUN"
    SPRINT = "SPRINT"
    BACK = "BACK"
    BACK_SPRINT = "BACK SPRINT"

    @property
    def label(self) -> str:
        """
        Text shown on the overlay for this action.
        """
        return self.value

    @property
    def keys(self) -> FrozenSet[KeyId]:
        """
        Keys that must be held while this action is active.
        """
        return _ACTION_KEYS[self]


_ACTION_KEYS = {
    Action.NEUTRAL: frozenset(),
    Action.RUN: frozenset({KeyId.FORWARD}),
    Action.SPRINT: frozenset({KeyId.FORWARD, KeyId.SPRINT}),
    Action.BACK: frozenset({KeyId.BACK}),
    Action.BACK_SPRINT: frozenset({KeyId.BACK, KeyId.SPRINT}),
}

# Highest first. Stronger movement wins; forward wins at equal strength.
ACTION_PRIORITY = (
    Action.SPRINT,
    Action.BACK_SPRINT,
    Action.RUN,
    Action.BACK,
    Action.NEUTRAL,
)


def strongest_action(*actions: Action) -> Action:
    """
    Resolve the actions signalled by several wrists into one.
    """
    return min(actions, key=ACTION_PRIORITY.index, default=Action.NEUTRAL)


@dataclass(frozen=True)
class ReferenceFrame:
    """
    Shoulder-based reference used to normalize wrist positions.
    """

    origin_x: float
    "Shoulder midpoint x (pixels)."
    origin_y: float
    "Shoulder midpoint y (pixels)."
    scale: float
    "Shoulder width (pixels)."

    def normalize(self, x: float, y: float) -> Tuple[float, float]:
        """
        Convert a pixel position into shoulder units relative to the origin.
        """
        return (x - self.origin_x) / self.scale, (y - self.origin_y) / self.scale

    def to_pixels(self, nx: float, ny: float) -> Tuple[float, float]:
        """
        Convert a position in shoulder units back to pixels.
        """
        return self.origin_x + nx * self.scale, self.origin_y + ny * self.scale


@dataclass(frozen=True)
class Region:
    """
    Axis-aligned rectangle in shoulder units.
    """

    x1: float
    x2: float
    y1: float
    y2: float
    label: str = ""

    def to_pixels(self, reference: ReferenceFrame) -> Tuple[int, int, int, int]:
        """
        Returns the rectangle as (left, top, right, bottom) pixels.
        """
        ax, ay = reference.to_pixels(self.x1, self.y1)
        bx, by = reference.to_pixels(self.x2, self.y2)
        return int(min(ax, bx)), int(min(ay, by)), int(max(ax, bx)), int(max(ay, by))


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of classifying one frame.
    """

    action: Action = Action.NEUTRAL
    jump_triggered: bool = False
    "Arms are raised. The jump key itself is decided by the jump debouncer."
    duck: bool = False
    wrists_visible: bool = False
    "At least one wrist passed the confidence gate."
    color: Optional[Color] = None
    highlight: Optional[Region] = None

    @property
    def label(self) -> str:
        if self.duck:
            return "DUCK"
        if not self.jump_triggered:
            return self.action.label
        if self.action is Action.NEUTRAL:
            return "JUMP"
        return f"{self.action.label} + JUMP"

    @property
    def desired_keys(self) -> FrozenSet[KeyId]:
        """
        Keys requested by the pose, without the jump key.
        """
        if self.duck:
            return frozenset({KeyId.DUCK})
        return self.action.keys


NEUTRAL_RESULT = ClassificationResult()


@dataclass(frozen=True)
class OverlaySnapshot:
    """
    Everything the renderer needs to draw one frame of the overlay.
    """

    is_tracking: bool = False
    reference: Optional[ReferenceFrame] = None
    label: str = ""
    color: Optional[Color] = None
    highlight: Optional[Region] = None
    keypoints: Optional[np.ndarray] = field(default=None, compare=False)
    "Raw (17, 3) keypoints of the frame: x, y, confidence."
    held_keys: FrozenSet[KeyId] = frozenset()
    fps: float = 0.0
    paused: bool = False
    resuming: bool = False
    resume_count: int = 0
