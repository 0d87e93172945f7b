"""
Camera helpers for PoseMario.

This module finds a working camera and opens it with the capture settings
from CameraConfig.
"""

import cv2 as cv
import logging

from posemario.config import CameraConfig

logger = logging.getLogger(__name__)


def find_working_port(max_failures=3):
    """
    Probe camera ports in order and return the first one that delivers frames.

    Args:
        max_failures (int): Stop after this many consecutive ports fail to open

    Returns:
        int or None: Port number, or None if no camera works
    """
    port = 0
    failures = 0
    while failures < max_failures:
        camera = cv.VideoCapture(port)
        try:
            if not camera.isOpened():
                failures += 1
                logger.info(f"Port {port} is not working.")
            else:
                failures = 0
                is_reading, _ = camera.read()
                if is_reading:
                    logger.info(f"Port {port} is working and reads images "
                                f"({camera.get(cv.CAP_PROP_FRAME_WIDTH):.0f} x "
                                f"{camera.get(cv.CAP_PROP_FRAME_HEIGHT):.0f})")
                    return port
                logger.info(f"Port {port} is present but does not read.")
        finally:
            camera.release()
        port += 1
    return None


def open_camera(port=None):
    """
    Open and configure the camera.

    Args:
        port (int): Camera port. If None, uses CameraConfig.PORT or auto-selects.

    Returns:
        cv.VideoCapture: Opened capture object

    Raises:
        RuntimeError: If no camera can be opened
    """
    port = port if port is not None else CameraConfig.PORT
    if port is None:
        port = find_working_port()
        if port is None:
            raise RuntimeError("No working camera found")
        logger.info(f"Auto-selected camera port {port}")

    logger.info(f"Setting up camera on port {port}")
    if CameraConfig.BACKEND is not None:
        cap = cv.VideoCapture(port, CameraConfig.BACKEND)
    else:
        cap = cv.VideoCapture(port)

    if not cap.isOpened():
        cap.release()
        raise RuntimeError(f"Could not open camera {port}")

    # Set buffer size BEFORE other properties to reduce latency
    cap.set(cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE)
    cap.set(cv.CAP_PROP_FRAME_WIDTH, CameraConfig.DEFAULT_WIDTH)
    cap.set(cv.CAP_PROP_FRAME_HEIGHT, CameraConfig.DEFAULT_HEIGHT)

    logger.info(f"Camera configured: {cap.get(cv.CAP_PROP_FRAME_WIDTH):.0f}x"
                f"{cap.get(cv.CAP_PROP_FRAME_HEIGHT):.0f} @ {cap.get(cv.CAP_PROP_FPS):.1f}fps, "
                f"buffer={cap.get(cv.CAP_PROP_BUFFERSIZE):.0f}")
    return cap
