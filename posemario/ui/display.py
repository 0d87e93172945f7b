"""
UI Display Module - Drawing the control overlay.

This module contains the functions that draw the gesture zones, the active
zone, the skeleton and status text on top of the camera image.
"""

import cv2 as cv
import logging

from posemario.config import PoseConfig, UIConfig
from posemario.detection.keypoints import SKELETON

logger = logging.getLogger(__name__)


def fill_rect(image, rect, color, alpha):
    """
    Draw a translucent filled rectangle.

    Args:
        image: Image to draw on (modified in place)
        rect (tuple): (left, top, right, bottom) in pixels
        color (tuple): BGR color
        alpha (float): Opacity of the fill (0-1)
    """
    h, w = image.shape[:2]
    x1, y1, x2, y2 = rect
    x1, x2 = max(0, x1), min(w, x2)
    y1, y2 = max(0, y1), min(h, y2)
    if x2 <= x1 or y2 <= y1:
        return
    roi = image[y1:y2, x1:x2]
    block = roi.copy()
    block[:] = color
    cv.addWeighted(block, alpha, roi, 1 - alpha, 0, roi)


def draw_centered_text(image, text, y, scale, color, thickness=2):
    """Draw text centered horizontally with a drop shadow."""
    (tw, th), _ = cv.getTextSize(text, cv.FONT_HERSHEY_SIMPLEX, scale, thickness)
    x = (image.shape[1] - tw) // 2
    cv.putText(image, text, (x + 2, y + 2), cv.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness)
    cv.putText(image, text, (x, y), cv.FONT_HERSHEY_SIMPLEX, scale, color, thickness)


def draw_region(image, region, reference, color, active, label=""):
    """
    Draw one gesture zone.

    Args:
        image: Image to draw on
        region (Region): Zone in shoulder units
        reference (ReferenceFrame): Smoothed shoulder reference
        color (tuple): BGR fill color
        active (bool): Highlight with a border and a large label
        label (str): Text drawn in the middle of the zone
    """
    rect = region.to_pixels(reference)
    fill_rect(image, rect, color, UIConfig.ACTIVE_ALPHA if active else UIConfig.IDLE_ALPHA)

    if active:
        cv.rectangle(image, rect[:2], rect[2:], UIConfig.COLOR_WHITE, 3)

    if label:
        scale = 0.9 if active else 0.45
        (tw, th), _ = cv.getTextSize(label, cv.FONT_HERSHEY_SIMPLEX, scale, 2)
        tx = (rect[0] + rect[2] - tw) // 2
        ty = (rect[1] + rect[3] + th) // 2
        cv.putText(image, label, (tx, ty), cv.FONT_HERSHEY_SIMPLEX, scale, UIConfig.COLOR_WHITE, 2)


def draw_skeleton(image, keypoints, threshold=None):
    """Draw bones between joints that are both confidently detected."""
    threshold = threshold if threshold is not None else PoseConfig.CONFIDENCE_THRESHOLD
    for a, b in SKELETON:
        pa, pb = keypoints[a], keypoints[b]
        if pa[2] > threshold and pb[2] > threshold:
            cv.line(image, (int(pa[0]), int(pa[1])), (int(pb[0]), int(pb[1])), UIConfig.COLOR_SKELETON, 2)


def draw_overlay(image, snapshot, regions):
    """
    Draw the full overlay for one snapshot.

    Args:
        image: Camera image to draw on (modified in place)
        snapshot (OverlaySnapshot): Latest published control state, or None
        regions (list): Inactive zones to draw behind the active one

    Returns:
        numpy.ndarray: The image
    """
    if snapshot is None:
        return image

    if snapshot.resuming:
        fill_rect(image, (0, 0, image.shape[1], image.shape[0]), (0, 0, 0), 0.4)
        mid = image.shape[0] // 2
        draw_centered_text(image, "Resuming in", mid - 40, 1.2, UIConfig.COLOR_WHITE)
        draw_centered_text(image, str(snapshot.resume_count), mid + 60, 3.0, UIConfig.COLOR_SPRINT, 4)
        return image

    if snapshot.paused:
        fill_rect(image, (0, 0, image.shape[1], image.shape[0]), (0, 0, 0), 0.6)
        draw_centered_text(image, "Paused", image.shape[0] // 2, 2.0, UIConfig.COLOR_YELLOW, 3)
        return image

    if not snapshot.is_tracking or snapshot.reference is None:
        cv.putText(image, "No Pose / Too Far", (20, 50), cv.FONT_HERSHEY_SIMPLEX,
                   UIConfig.FONT_SCALE * 1.5, UIConfig.COLOR_RED, UIConfig.FONT_THICKNESS)
    else:
        for region in regions:
            draw_region(image, region, snapshot.reference, UIConfig.COLOR_IDLE, False, region.label)
        if snapshot.highlight is not None and snapshot.color is not None:
            draw_region(image, snapshot.highlight, snapshot.reference, snapshot.color, True, snapshot.label)

    if snapshot.keypoints is not None:
        draw_skeleton(image, snapshot.keypoints)

    cv.putText(image, f"FPS: {snapshot.fps:.1f}", (10, image.shape[0] - 20), cv.FONT_HERSHEY_SIMPLEX,
               UIConfig.FONT_SCALE, UIConfig.COLOR_RUN, UIConfig.FONT_THICKNESS)
    if snapshot.is_tracking:
        keys = " ".join(sorted(k.value for k in snapshot.held_keys)) or "-"
        cv.putText(image, f"{snapshot.label}  [{keys}]", (10, 30), cv.FONT_HERSHEY_SIMPLEX,
                   UIConfig.FONT_SCALE, UIConfig.COLOR_YELLOW, UIConfig.FONT_THICKNESS)
    return image
