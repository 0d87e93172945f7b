"""
PoseMario - Play a side-scroller with your body.

This is the main entry point: it opens the camera, loads the pose model,
starts the camera, inference and display threads, and releases every held
key on the way out.
"""

import argparse
import logging
import signal
import sys
import threading

from posemario.config import CameraConfig, KeyConfig, PoseConfig, WorkerConfig, ZoneConfig
from posemario.control.jump import JumpDebouncer
from posemario.control.keys import KeySynchronizer, LoggingKeyDispatcher
from posemario.control.pause import PauseController
from posemario.control.pipeline import ControlPipeline
from posemario.control.zone_classifier import ZoneClassifier
from posemario.core.camera_thread import CameraWorker
from posemario.core.display_thread import DisplayThread
from posemario.core.utils import open_camera
from posemario.core.workers import InferenceWorker
from posemario.detection.pose_source import create_pose_source
from posemario.utils import FrameHandoff, LatestValue

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='PoseMario - body pose game controller')
    parser.add_argument('--camera', type=int, default=None,
                        help='Camera port (default: first working camera)')
    parser.add_argument('--backend', choices=['movenet', 'mediapipe'], default=PoseConfig.BACKEND,
                        help='Pose estimation backend')
    parser.add_argument('--model', default=PoseConfig.MODEL_PATH,
                        help='Path to the MoveNet ONNX model')
    parser.add_argument('--input-size', type=int, default=PoseConfig.INPUT_SIZE,
                        help='MoveNet input size (192 lightning, 256 thunder)')
    parser.add_argument('--duck', action='store_true',
                        help='Enable the duck gesture (hands low in front of the body)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Log key events instead of sending them')
    parser.add_argument('--headless', action='store_true',
                        help='Run without the overlay window')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def apply_args(args):
    """Write command line overrides into the configuration classes."""
    CameraConfig.PORT = args.camera
    CameraConfig.HEADLESS = args.headless
    PoseConfig.BACKEND = args.backend
    PoseConfig.MODEL_PATH = args.model
    PoseConfig.INPUT_SIZE = args.input_size
    ZoneConfig.DUCK_ENABLED = args.duck
    KeyConfig.DRY_RUN = args.dry_run


def create_dispatcher():
    """
    Build the key dispatcher.
    pynput is only imported when keys are really sent.
    """
    if KeyConfig.DRY_RUN:
        logger.info("Dry run: key events are logged, not sent")
        return LoggingKeyDispatcher()

    from posemario.control.keyboard_dispatcher import PynputKeyDispatcher
    logger.info("Game control key mappings:")
    return PynputKeyDispatcher()


def setup_signal_handler(stop_event):
    """
    Setup signal handler for graceful shutdown.

    Args:
        stop_event (threading.Event): Event to signal on interrupt
    """
    def signal_handler(sig, frame):
        logger.info("Signal received, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def run(args):
    """
    Start all threads and wait until the user quits.

    Returns:
        int: Process exit code
    """
    apply_args(args)

    # Startup failures are fatal: no model, no keyboard or no camera means nothing to do
    try:
        pose_source = create_pose_source()
    except (RuntimeError, ValueError) as e:
        logger.error(f"Pose model initialization failed: {e}")
        return 1
    try:
        dispatcher = create_dispatcher()
    except (ImportError, ValueError) as e:
        logger.error(f"Key dispatcher initialization failed: {e}")
        pose_source.close()
        return 1
    try:
        cap = open_camera()
    except RuntimeError as e:
        logger.error(f"Camera unavailable: {e}")
        pose_source.close()
        return 1

    stop_event = threading.Event()
    setup_signal_handler(stop_event)

    handoff = FrameHandoff()
    display_image = LatestValue()
    overlay = LatestValue()

    classifier = ZoneClassifier()
    pause = PauseController()
    pipeline = ControlPipeline(
        KeySynchronizer(dispatcher),
        classifier=classifier,
        jump=JumpDebouncer(),
        pause=pause,
    )

    camera_worker = CameraWorker(cap, handoff, display_image, stop_event)
    inference_worker = InferenceWorker(pose_source, pipeline, handoff, overlay, stop_event)
    display_thread = None
    if not CameraConfig.HEADLESS:
        display_thread = DisplayThread(display_image, overlay, classifier.background_regions(),
                                       stop_event, on_pause_toggle=pause.request_toggle)

    camera_worker.start()
    inference_worker.start()
    try:
        camera_worker.wait_first_frame()

        if display_thread is not None:
            display_thread.start()
            logger.info("Controls: 'p'=pause/resume, 'q'=quit")
        else:
            logger.info("Running in headless mode. Send SIGINT (Ctrl+C) or SIGTERM to stop.")

        while not stop_event.is_set():
            stop_event.wait(0.2)
            if not inference_worker.is_alive():
                logger.error("Inference worker exited unexpectedly")
                stop_event.set()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received, shutting down...")
        stop_event.set()
    finally:
        cleanup(cap, pose_source, camera_worker, inference_worker, display_thread)
    return 0


def cleanup(cap, pose_source, camera_worker, inference_worker, display_thread):
    """
    Stop threads and release resources.

    The inference worker releases held keys itself before exiting, so it is
    always joined to the end even when a cycle outlasts the shutdown timeout.
    """
    logger.info("Cleaning up resources...")

    camera_worker.stop()
    inference_worker.stop()
    inference_worker.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)
    if inference_worker.is_alive():
        logger.warning("Inference worker did not stop in time, waiting for the current cycle")
        inference_worker.join()

    camera_worker.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)
    if camera_worker.is_alive():
        logger.warning("Camera worker is still blocked reading the device")
    if display_thread is not None:
        display_thread.join(timeout=WorkerConfig.THREAD_SHUTDOWN_TIMEOUT)

    cap.release()
    pose_source.close()
    logger.info("Cleanup complete")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
