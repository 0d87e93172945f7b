"""
Control Module - Turning body keypoints into held game keys.

This module provides:
- Subject tracking with acquisition / loss hysteresis (tracker.py)
- Dead-zone smoothing of the shoulder reference (smoother.py)
- Wrist zone classification (zone_classifier.py)
- Jump repeat cadence (jump.py)
- Held-key synchronization (keys.py)
- Pause with resume countdown (pause.py)
- The per-frame pipeline tying them together (pipeline.py)

The pynput dispatcher lives in keyboard_dispatcher.py and is not imported
here, since pynput needs a desktop session.
"""

from .jump import JumpDebouncer, JumpPhase
from .keys import KeyDispatcher, KeySynchronizer, LoggingKeyDispatcher
from .pause import PauseController, PauseState
from .pipeline import ControlPipeline
from .smoother import DeadZoneFilter, ReferenceSmoother
from .tracker import SubjectTracker, TrackingUpdate, measure_shoulders
from .types import (
    Action,
    ClassificationResult,
    KeyId,
    OverlaySnapshot,
    ReferenceFrame,
    Region,
)
from .zone_classifier import ZoneClassifier

__all__ = [
    'Action',
    'ClassificationResult',
    'ControlPipeline',
    'DeadZoneFilter',
    'JumpDebouncer',
    'JumpPhase',
    'KeyDispatcher',
    'KeyId',
    'KeySynchronizer',
    'LoggingKeyDispatcher',
    'OverlaySnapshot',
    'PauseController',
    'PauseState',
    'ReferenceFrame',
    'ReferenceSmoother',
    'Region',
    'SubjectTracker',
    'TrackingUpdate',
    'ZoneClassifier',
    'measure_shoulders',
]
