"""
Tests for the dead-zone reference smoother.
"""

import pytest

from posemario.control.smoother import DeadZoneFilter, ReferenceSmoother
from posemario.control.types import ReferenceFrame


def test_dead_zone_keeps_value_exactly():
    f = DeadZoneFilter(jitter_threshold=20, alpha=0.8)
    value = 100.0

    for raw in [119.9, 80.1, 105.0, 95.0] * 25:
        value = f.update(value, raw)

    assert value == 100.0


def test_moves_fraction_of_distance():
    f = DeadZoneFilter(jitter_threshold=20, alpha=0.8)

    assert f.update(100.0, 200.0) == pytest.approx(180.0)
    assert f.update(100.0, 0.0) == pytest.approx(20.0)


def test_threshold_is_exclusive():
    f = DeadZoneFilter(jitter_threshold=20, alpha=0.5)

    assert f.update(0.0, 20.0) == pytest.approx(10.0)


def test_converges_without_overshoot():
    f = DeadZoneFilter(jitter_threshold=1, alpha=0.8)
    value = 0.0
    history = []
    for _ in range(10):
        value = f.update(value, 100.0)
        history.append(value)

    assert history == sorted(history)
    assert all(v <= 100.0 for v in history)
    assert abs(100.0 - value) < 1.0


def test_rejects_bad_alpha():
    with pytest.raises(ValueError):
        DeadZoneFilter(alpha=0.0)
    with pytest.raises(ValueError):
        DeadZoneFilter(alpha=1.5)


def test_reference_smoother_filters_each_field_independently():
    smoother = ReferenceSmoother(jitter_threshold=20, alpha=0.8)
    smoother.reset(ReferenceFrame(640, 360, 40))

    value = smoother.update(ReferenceFrame(740, 365, 45))

    assert value.origin_x == pytest.approx(720)
    assert value.origin_y == 360
    assert value.scale == 40


def test_reference_smoother_first_value_snaps():
    smoother = ReferenceSmoother()

    assert smoother.update(ReferenceFrame(1, 2, 3)) == ReferenceFrame(1, 2, 3)
