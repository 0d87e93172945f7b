"""
Threaded camera acquisition.

This module provides a background thread that continuously reads frames
from the camera, publishes the newest one for display and offers it to the
inference thread through a single-slot handoff.
"""

import threading
import time
import logging

import cv2 as cv

from posemario.config import CameraConfig, WorkerConfig
from posemario.utils import FpsCounter, FrameHandoff, LatestValue

logger = logging.getLogger(__name__)


class CameraWorker(threading.Thread):
    """
    Background thread for continuous camera frame capture.

    Each frame read is mirrored (if configured), published as the latest
    display image and offered to the frame handoff. When the inference thread
    has not taken the previous frame yet, the new one is not queued for it.
    """

    def __init__(self, cap, handoff: FrameHandoff, display_image: LatestValue,
                 stop_event: threading.Event, mirror=None):
        """
        Initialize the camera worker.

        Args:
            cap: OpenCV VideoCapture object (already opened)
            handoff (FrameHandoff): Slot feeding the inference thread
            display_image (LatestValue): Newest frame for the renderer
            stop_event (threading.Event): Event to signal shutdown
            mirror (bool): Flip frames horizontally. If None, uses config default.
        """
        super().__init__(daemon=True, name="CameraWorker")
        self.cap = cap
        self.handoff = handoff
        self.display_image = display_image
        self.stop_event = stop_event
        self.mirror = mirror if mirror is not None else CameraConfig.MIRROR

        self.fps = FpsCounter()
        self.frames_read = 0

    def run(self):
        """Main worker loop - reads frames until stopped."""
        logger.info("CameraWorker started")

        while not self.stop_event.is_set():
            # May block indefinitely if the device stalls
            ret, frame = self.cap.read()
            if not ret or frame is None:
                logger.debug("Camera returned no frame")
                time.sleep(0.005)
                continue

            if self.mirror:
                frame = cv.flip(frame, 1)

            self.frames_read += 1
            self.fps.tick()
            self.display_image.publish(frame)
            self.handoff.offer(frame)

        logger.info(f"CameraWorker stopped ({self.frames_read} frames read, "
                    f"{self.handoff.dropped} not handed to inference)")

    def wait_first_frame(self, timeout=None):
        """
        Block until the first frame has been published.

        Returns:
            bool: True if a frame arrived within the timeout
        """
        timeout = timeout if timeout is not None else WorkerConfig.FIRST_FRAME_TIMEOUT
        start_time = time.time()
        while self.display_image.get() is None and (time.time() - start_time) < timeout:
            time.sleep(0.01)

        if self.display_image.get() is None:
            logger.warning("CameraWorker started but no frame captured yet")
            return False
        logger.info("CameraWorker ready")
        return True

    def stop(self):
        """Signal the worker to stop."""
        logger.info("Stopping CameraWorker...")
        self.stop_event.set()
