"""
Core Module - Threads and camera helpers.

This module contains the runtime building blocks of PoseMario:
- Camera acquisition thread (camera_thread.py)
- Inference and control thread (workers.py)
- Overlay rendering thread (display_thread.py)
- Camera selection and setup (utils.py)

Only the inference worker is re-exported here; the other modules import
OpenCV's GUI and capture backends and are imported where they are used.
"""

from .workers import InferenceWorker

__all__ = [
    'InferenceWorker',
]
