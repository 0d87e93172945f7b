"""
Display thread module for non-blocking overlay rendering.

This module implements a background thread that repaints the overlay window
on a fixed cadence from the latest published camera image and overlay
snapshot. It never waits on the camera or inference threads; it simply draws
whatever is newest, possibly skipping or repeating frames.
"""

import cv2 as cv
import threading
import logging
import time

from posemario.config import UIConfig
from posemario.ui.display import draw_overlay

logger = logging.getLogger(__name__)


class DisplayThread:
    """
    Background thread for overlay rendering and window key handling.

    Attributes:
        window_name (str): Name of the OpenCV window
        thread (threading.Thread): Background display thread
        stop_event (threading.Event): Signal to stop the application
    """

    def __init__(self, display_image, overlay, regions, stop_event, on_pause_toggle=None,
                 window_name=None, refresh_interval=None):
        """
        Initialize the display thread.

        Args:
            display_image (LatestValue): Newest camera frame
            overlay (LatestValue): Newest OverlaySnapshot
            regions (list): Zones drawn behind the active one
            stop_event (threading.Event): Set when the user quits
            on_pause_toggle (callable): Called when the pause key is pressed
            window_name (str): Name for the OpenCV window. If None, uses config default.
            refresh_interval (float): Seconds between repaints. If None, uses config default.
        """
        self.display_image = display_image
        self.overlay = overlay
        self.regions = regions
        self.stop_event = stop_event
        self.on_pause_toggle = on_pause_toggle
        self.window_name = window_name if window_name is not None else UIConfig.WINDOW_NAME
        self.refresh_interval = refresh_interval if refresh_interval is not None else UIConfig.REFRESH_INTERVAL
        self.thread = None
        self.running = False

        logger.info(f"DisplayThread initialized with window '{self.window_name}'")

    def start(self):
        """Start the display thread."""
        if self.running:
            logger.warning("DisplayThread already running")
            return

        self.running = True
        self.thread = threading.Thread(target=self._display_loop, daemon=True, name="DisplayThread")
        self.thread.start()
        logger.info("DisplayThread started")

    def join(self, timeout=None):
        """Wait for the display loop to exit and close the window."""
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=timeout)
        self.running = False

    def handle_key(self, key):
        """
        React to a key pressed in the overlay window.

        Returns:
            bool: False if the application should quit
        """
        if key in (27, ord('q')):
            logger.info('Exiting...')
            self.stop_event.set()
            return False
        if key == ord('p') and self.on_pause_toggle is not None:
            self.on_pause_toggle()
        return True

    def _display_loop(self):
        """
        Background thread loop that repaints the window.
        """
        logger.info("Display loop started")
        cv.namedWindow(self.window_name, cv.WINDOW_NORMAL)

        try:
            while not self.stop_event.is_set():
                start = time.time()
                try:
                    frame = self.display_image.get()
                    if frame is not None:
                        image = draw_overlay(frame.copy(), self.overlay.get(), self.regions)
                        cv.imshow(self.window_name, image)

                    key = cv.waitKey(1) & 0xFF
                    if key != 255 and not self.handle_key(key):
                        break
                except Exception as e:
                    logger.error(f"Error in display loop: {e}", exc_info=True)

                remaining = self.refresh_interval - (time.time() - start)
                if remaining > 0:
                    time.sleep(remaining)
        finally:
            cv.destroyWindow(self.window_name)
            logger.info("Display loop exiting")
