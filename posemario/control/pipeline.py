"""
Per-frame control pipeline.

Runs subject tracking, reference smoothing, zone classification, jump
debouncing and key synchronization for one frame of keypoints, and returns
the overlay snapshot describing the outcome. All state touched here belongs
to the thread that calls `process`.
"""

import logging
from typing import Optional

import numpy as np

from posemario.config import PoseConfig
from posemario.control.jump import JumpDebouncer
from posemario.control.keys import KeySynchronizer
from posemario.control.pause import PauseController, PauseState
from posemario.control.smoother import ReferenceSmoother
from posemario.control.tracker import SubjectTracker, measure_shoulders
from posemario.control.types import ClassificationResult, KeyId, OverlaySnapshot
from posemario.control.zone_classifier import ZoneClassifier

logger = logging.getLogger(__name__)


class ControlPipeline:
    """
    Turns keypoints into held keys and an overlay snapshot.
    """

    def __init__(self, synchronizer: KeySynchronizer, tracker: Optional[SubjectTracker] = None,
                 smoother: Optional[ReferenceSmoother] = None, classifier: Optional[ZoneClassifier] = None,
                 jump: Optional[JumpDebouncer] = None, pause: Optional[PauseController] = None,
                 confidence_threshold=None):
        self.synchronizer = synchronizer
        self.tracker = tracker if tracker is not None else SubjectTracker()
        self.smoother = smoother if smoother is not None else ReferenceSmoother()
        self.classifier = classifier if classifier is not None else ZoneClassifier()
        self.jump = jump if jump is not None else JumpDebouncer()
        self.pause = pause if pause is not None else PauseController()
        self.confidence_threshold = (confidence_threshold if confidence_threshold is not None
                                     else PoseConfig.CONFIDENCE_THRESHOLD)
        self.last_result: Optional[ClassificationResult] = None

    def process(self, keypoints: Optional[np.ndarray], frame_width: int, fps: float = 0.0) -> OverlaySnapshot:
        """
        Run one control cycle.

        Args:
            keypoints: (17, 3) array of x, y, confidence in frame pixels, or None
                when nothing was detected
            frame_width (int): Width of the frame the keypoints refer to
            fps (float): Current inference rate, for the overlay

        Returns:
            OverlaySnapshot: What the renderer should show for this frame
        """
        pause_state = self.pause.update()
        if not pause_state.active:
            return self._paused(pause_state)

        raw = measure_shoulders(keypoints, frame_width, self.confidence_threshold)
        raw_scale = raw.scale if raw is not None else 0.0
        offset = raw.origin_x / frame_width - 0.5 if raw is not None else 0.0

        update = self.tracker.update(raw_scale, offset)
        if update.lost:
            self.release_all()
        if not update.is_tracking:
            self.last_result = None
            return OverlaySnapshot(keypoints=keypoints, held_keys=self.synchronizer.held, fps=fps)

        if update.acquired:
            reference = self.smoother.reset(raw)
        else:
            reference = self.smoother.update(raw)

        result = self.classifier.classify(keypoints, reference)
        self.last_result = result

        # With both wrists occluded the trigger is unknown, not false: held keys
        # and the jump phase are left as they are until a wrist is seen or tracking is lost.
        if result.wrists_visible:
            desired = set(result.desired_keys)
            if self.jump.update(result.jump_triggered):
                desired.add(KeyId.JUMP)
            self.synchronizer.sync(desired)

        return OverlaySnapshot(
            is_tracking=True,
            reference=reference,
            label=result.label,
            color=result.color,
            highlight=result.highlight,
            keypoints=keypoints,
            held_keys=self.synchronizer.held,
            fps=fps,
        )

    def _paused(self, pause_state: PauseState) -> OverlaySnapshot:
        self.jump.reset()
        self.synchronizer.sync(())
        return OverlaySnapshot(
            is_tracking=self.tracker.is_tracking,
            paused=pause_state.paused,
            resuming=pause_state.resuming,
            resume_count=pause_state.resume_count,
        )

    def release_all(self) -> None:
        """Release every held key and reset the jump cadence."""
        self.jump.reset()
        self.synchronizer.release_all()
