"""
Background inference worker.

This module contains the thread that takes camera frames from the handoff,
runs pose estimation and the control pipeline, and publishes the overlay
snapshot for the renderer.
"""

import threading
import logging

from posemario.config import WorkerConfig
from posemario.control.pipeline import ControlPipeline
from posemario.control.types import OverlaySnapshot
from posemario.utils import FpsCounter, FrameHandoff, LatestValue

logger = logging.getLogger(__name__)


class InferenceWorker(threading.Thread):
    """
    Background worker thread for pose inference and key control.

    This thread is the only owner of the tracking, jump and held-key state
    (all inside the pipeline). Whatever way it exits, every held key is
    released before the thread ends. The thread is not a daemon so that
    interpreter exit waits for that release.
    """

    def __init__(self, pose_source, pipeline: ControlPipeline, handoff: FrameHandoff,
                 overlay: LatestValue, stop_event: threading.Event):
        """
        Initialize the inference worker.

        Args:
            pose_source: PoseSource instance (already loaded)
            pipeline (ControlPipeline): Per-frame control pipeline
            handoff (FrameHandoff): Slot delivering camera frames
            overlay (LatestValue): Published OverlaySnapshot for the renderer
            stop_event (threading.Event): Event to signal shutdown
        """
        super().__init__(daemon=False, name="InferenceWorker")
        self.pose_source = pose_source
        self.pipeline = pipeline
        self.handoff = handoff
        self.overlay = overlay
        self.stop_event = stop_event

        self.fps = FpsCounter()
        self.cycles = 0
        self.failed_cycles = 0

        logger.info(f"Initialized inference worker with {getattr(pose_source, 'name', 'pose')} backend")

    def run(self):
        """Main worker loop - processes frames from the handoff."""
        logger.info("InferenceWorker started")
        try:
            while not self.stop_event.is_set():
                frame = self.handoff.take(timeout=WorkerConfig.QUEUE_TIMEOUT)
                if frame is None:
                    continue
                self.overlay.publish(self.process_frame(frame))
        finally:
            self.pipeline.release_all()
            logger.info(f"InferenceWorker stopped after {self.cycles} cycles ({self.failed_cycles} failed)")

    def process_frame(self, frame) -> OverlaySnapshot:
        """
        Run one inference cycle.

        A failure in pose estimation or classification is logged and the
        frame is handled as if nobody had been detected.
        """
        self.cycles += 1
        width = frame.shape[1]
        fps = self.fps.tick()
        try:
            keypoints = self.pose_source.estimate(frame)
            return self.pipeline.process(keypoints, width, fps)
        except Exception as e:
            self.failed_cycles += 1
            logger.error(f"Inference cycle failed: {e}", exc_info=True)
            return self.pipeline.process(None, width, fps)

    def stop(self):
        """Signal the worker to stop and exit."""
        logger.info("Stopping inference worker")
        self.stop_event.set()
