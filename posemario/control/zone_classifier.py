"""
Zone classification of wrist positions.

Wrist positions are normalized against the tracked shoulder reference frame
and sorted into horizontal movement bands (back sprint, back, neutral, run,
sprint) and vertical bands (jump above the shoulders, arm-down below the zone
limit, optional duck zone).
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from posemario.config import PoseConfig, UIConfig, ZoneConfig
from posemario.control.types import (
    Action,
    ClassificationResult,
    ReferenceFrame,
    Region,
    strongest_action,
)
from posemario.detection.keypoints import WRISTS

logger = logging.getLogger(__name__)


class ZoneClassifier:
    """
    Maps normalized wrist offsets to an Action plus jump / duck triggers.

    Boundaries: a wrist exactly at SPRINT_START is a sprint, a wrist exactly
    at RUN_START is neutral. The same holds mirrored for the back direction.
    """

    def __init__(self, confidence_threshold=None, duck_enabled=None):
        self.confidence_threshold = (confidence_threshold if confidence_threshold is not None
                                     else PoseConfig.CONFIDENCE_THRESHOLD)
        self.duck_enabled = duck_enabled if duck_enabled is not None else ZoneConfig.DUCK_ENABLED

        self.run_start = ZoneConfig.RUN_START
        self.sprint_start = ZoneConfig.SPRINT_START
        self.sprint_end = ZoneConfig.SPRINT_END
        self.jump_end = ZoneConfig.JUMP_END
        self.jump_start = ZoneConfig.JUMP_START
        self.zone_limit = ZoneConfig.ZONE_LIMIT
        self.duck_bottom = ZoneConfig.DUCK_BOTTOM
        self.duck_half_width = ZoneConfig.DUCK_HALF_WIDTH

        if not 0 < self.run_start < self.sprint_start:
            raise ValueError(
                f"Zone bands must satisfy 0 < RUN_START < SPRINT_START, "
                f"got {self.run_start} and {self.sprint_start}"
            )

    def horizontal_action(self, nx: float) -> Action:
        """
        Returns the movement band a single wrist falls into.
        """
        magnitude = abs(nx)
        if magnitude >= self.sprint_start:
            return Action.SPRINT if nx > 0 else Action.BACK_SPRINT
        if magnitude > self.run_start:
            return Action.RUN if nx > 0 else Action.BACK
        return Action.NEUTRAL

    def wrist_offsets(self, keypoints: np.ndarray, reference: ReferenceFrame) -> List[Tuple[float, float]]:
        """
        Returns (nx, ny) for every wrist that passes the confidence gate.
        """
        offsets = []
        for idx in WRISTS:
            x, y, conf = keypoints[idx]
            if conf < self.confidence_threshold:
                continue
            offsets.append(reference.normalize(float(x), float(y)))
        return offsets

    def classify(self, keypoints: np.ndarray, reference: ReferenceFrame) -> ClassificationResult:
        """
        Classify one frame.

        Args:
            keypoints: (17, 3) array of x, y, confidence
            reference (ReferenceFrame): Smoothed shoulder reference

        Returns:
            ClassificationResult: Action, triggers, overlay color and highlight
        """
        offsets = self.wrist_offsets(keypoints, reference)
        if not offsets:
            return ClassificationResult(wrists_visible=False)

        actions = []
        jump = False
        duck = False
        for nx, ny in offsets:
            if ny > self.zone_limit:
                if self.duck_enabled and ny <= self.duck_bottom and abs(nx) <= self.duck_half_width:
                    duck = True
                continue
            if ny < self.jump_start:
                jump = True
            actions.append(self.horizontal_action(nx))

        action = strongest_action(*actions)
        logger.debug(f"Wrists {offsets} -> {action.name} jump={jump} duck={duck}")

        if duck:
            return ClassificationResult(
                action=Action.NEUTRAL,
                duck=True,
                wrists_visible=True,
                color=UIConfig.COLOR_DUCK,
                highlight=Region(-self.duck_half_width, self.duck_half_width,
                                 self.zone_limit, self.duck_bottom),
            )

        return ClassificationResult(
            action=action,
            jump_triggered=jump,
            wrists_visible=True,
            color=self._color(action, jump),
            highlight=self._highlight(action, jump),
        )

    def _color(self, action: Action, jump: bool):
        if jump:
            return UIConfig.COLOR_JUMP
        return {
            Action.RUN: UIConfig.COLOR_RUN,
            Action.SPRINT: UIConfig.COLOR_SPRINT,
            Action.BACK: UIConfig.COLOR_BACK,
            Action.BACK_SPRINT: UIConfig.COLOR_SPRINT,
        }.get(action, UIConfig.COLOR_IDLE)

    def _highlight(self, action: Action, jump: bool) -> Optional[Region]:
        spans = {
            Action.RUN: (self.run_start, self.sprint_start),
            Action.SPRINT: (self.sprint_start, self.sprint_end),
            Action.BACK: (-self.sprint_start, -self.run_start),
            Action.BACK_SPRINT: (-self.sprint_end, -self.sprint_start),
        }
        if action is Action.NEUTRAL and not jump:
            return None

        x1, x2 = spans.get(action, (-self.run_start, self.run_start))
        if jump:
            return Region(x1, x2, self.jump_end, self.jump_start)
        return Region(x1, x2, self.jump_start, self.zone_limit)

    def background_regions(self) -> List[Region]:
        """
        Returns every zone, for drawing the inactive overlay.
        """
        regions = [
            Region(-self.sprint_end, -self.sprint_start, self.jump_start, self.zone_limit, "SPRINT"),
            Region(-self.sprint_start, -self.run_start, self.jump_start, self.zone_limit, "BACK"),
            Region(-self.sprint_end, self.sprint_end, self.jump_end, self.jump_start, "JUMP"),
            Region(self.run_start, self.sprint_start, self.jump_start, self.zone_limit, "RUN"),
            Region(self.sprint_start, self.sprint_end, self.jump_start, self.zone_limit, "SPRINT"),
        ]
        if self.duck_enabled:
            regions.append(Region(-self.duck_half_width, self.duck_half_width,
                                  self.zone_limit, self.duck_bottom, "DUCK"))
        return regions
