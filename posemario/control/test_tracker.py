"""
Tests for subject acquisition and loss.
"""

import pytest

from conftest import FRAME_WIDTH, make_keypoints
from posemario.control.tracker import SubjectTracker, measure_shoulders


def feed(tracker, scales, offset=0.0):
    return [tracker.update(s, offset).is_tracking for s in scales]


def test_acquires_above_threshold_when_centered():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20, center_tolerance=0.15)

    update = tracker.update(31, 0.0)

    assert update.is_tracking and update.acquired
    assert tracker.is_tracking


def test_does_not_acquire_off_center():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20, center_tolerance=0.15)

    assert not tracker.update(50, 0.2).is_tracking
    assert not tracker.update(50, -0.15).is_tracking
    assert tracker.update(50, 0.1).is_tracking


def test_oscillation_inside_gap_never_acquires():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20)

    states = feed(tracker, [21, 29, 25, 30, 20, 29] * 5)

    assert not any(states)


def test_oscillation_inside_gap_never_loses():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20)
    tracker.update(40, 0.0)

    states = feed(tracker, [21, 29, 25, 20, 30, 22] * 5)

    assert all(states)


def test_toggles_once_per_full_crossing():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20)

    updates = [tracker.update(s, 0.0) for s in [40, 25, 10, 25, 40, 25, 10]]

    assert [u.acquired for u in updates] == [True, False, False, False, True, False, False]
    assert [u.lost for u in updates] == [False, False, True, False, False, False, True]


def test_loss_ignores_centering():
    tracker = SubjectTracker(acquire_scale_min=30, lose_scale_min=20)
    tracker.update(40, 0.0)

    assert tracker.update(40, 0.4).is_tracking


def test_no_detection_counts_as_zero_scale():
    tracker = SubjectTracker()
    tracker.update(40, 0.0)

    update = tracker.update(0.0, 0.0)

    assert update.lost and not tracker.is_tracking


def test_rejects_inverted_thresholds():
    with pytest.raises(ValueError):
        SubjectTracker(acquire_scale_min=20, lose_scale_min=20)


def test_measure_shoulders():
    keypoints = make_keypoints(mid=(600, 300), scale=40)

    reference = measure_shoulders(keypoints, FRAME_WIDTH, confidence_threshold=0.3)

    assert reference.origin_x == pytest.approx(600)
    assert reference.origin_y == pytest.approx(300)
    assert reference.scale == pytest.approx(40)


def test_measure_shoulders_low_confidence():
    keypoints = make_keypoints(shoulder_conf=0.1)

    assert measure_shoulders(keypoints, FRAME_WIDTH, confidence_threshold=0.3) is None
    assert measure_shoulders(None, FRAME_WIDTH) is None
