"""
End-to-end tests of one control cycle, from keypoints to held keys.
"""

import pytest

from conftest import FRAME_WIDTH, make_keypoints
from posemario.control.jump import JumpDebouncer, JumpPhase
from posemario.control.keys import KeySynchronizer
from posemario.control.pause import PauseController
from posemario.control.pipeline import ControlPipeline
from posemario.control.types import KeyId
from posemario.control.zone_classifier import ZoneClassifier
from posemario.detection.keypoints import LEFT_WRIST, RIGHT_WRIST


@pytest.fixture
def pipeline(dispatcher, clock):
    return ControlPipeline(
        KeySynchronizer(dispatcher),
        classifier=ZoneClassifier(confidence_threshold=0.3, duck_enabled=False),
        jump=JumpDebouncer(0.4, 0.075, clock=clock),
        pause=PauseController(countdown=3.0, clock=clock),
        confidence_threshold=0.3,
    )


def running(nx=1.5, ny=0.0, conf=0.9):
    return make_keypoints(wrists={RIGHT_WRIST: (nx, ny, conf)})


def test_run_presses_forward(pipeline, dispatcher):
    snapshot = pipeline.process(running(), FRAME_WIDTH)

    assert snapshot.is_tracking
    assert snapshot.label == "RUN"
    assert snapshot.held_keys == {KeyId.FORWARD}
    assert dispatcher.events == [("press", KeyId.FORWARD)]


def test_sprint_presses_forward_and_sprint(pipeline):
    snapshot = pipeline.process(running(nx=2.5), FRAME_WIDTH)

    assert snapshot.label == "SPRINT"
    assert snapshot.held_keys == {KeyId.FORWARD, KeyId.SPRINT}


def test_occluded_wrists_leave_keys_unchanged(pipeline, dispatcher):
    pipeline.process(running(), FRAME_WIDTH)

    occluded = make_keypoints(wrists={LEFT_WRIST: (0, 0, 0.0), RIGHT_WRIST: (0, 0, 0.0)})
    snapshot = pipeline.process(occluded, FRAME_WIDTH)

    assert snapshot.is_tracking
    assert snapshot.label == "NEUTRAL"
    assert snapshot.held_keys == {KeyId.FORWARD}
    assert dispatcher.events == [("press", KeyId.FORWARD)]


def test_occluded_wrists_keep_jump_phase(pipeline, dispatcher, clock):
    pipeline.process(running(nx=0.0, ny=-1.5), FRAME_WIDTH)

    clock.advance(1.0)
    occluded = make_keypoints(wrists={LEFT_WRIST: (0, 0, 0.0), RIGHT_WRIST: (0, 0, 0.0)})
    snapshot = pipeline.process(occluded, FRAME_WIDTH)

    assert pipeline.jump.phase is JumpPhase.HELD
    assert snapshot.held_keys == {KeyId.JUMP}
    assert dispatcher.releases() == []

    pipeline.process(running(nx=0.0, ny=0.0), FRAME_WIDTH)

    assert pipeline.jump.phase is JumpPhase.IDLE
    assert pipeline.synchronizer.held == frozenset()


def test_no_keys_when_nothing_was_ever_held(pipeline, dispatcher):
    snapshot = pipeline.process(make_keypoints(), FRAME_WIDTH)

    assert snapshot.label == "NEUTRAL"
    assert snapshot.held_keys == frozenset()
    assert dispatcher.events == []


def test_arms_down_releases_movement(pipeline, dispatcher):
    pipeline.process(running(), FRAME_WIDTH)

    snapshot = pipeline.process(running(ny=1.2), FRAME_WIDTH)

    assert snapshot.held_keys == frozenset()
    assert dispatcher.releases(KeyId.FORWARD) == [KeyId.FORWARD]


def test_loss_releases_everything(pipeline, dispatcher):
    pipeline.process(running(nx=1.5, ny=-1.5), FRAME_WIDTH)
    assert pipeline.synchronizer.held == {KeyId.FORWARD, KeyId.JUMP}

    snapshot = pipeline.process(None, FRAME_WIDTH)

    assert not snapshot.is_tracking
    assert snapshot.held_keys == frozenset()
    assert sorted(k.value for k in dispatcher.releases()) == ["forward", "jump"]
    assert pipeline.last_result is None
    assert pipeline.jump.phase is JumpPhase.IDLE


def test_small_subject_is_not_acquired(pipeline, dispatcher):
    snapshot = pipeline.process(make_keypoints(scale=25, wrists={RIGHT_WRIST: (1.5, 0.0, 0.9)}), FRAME_WIDTH)

    assert not snapshot.is_tracking
    assert dispatcher.events == []


def test_off_center_subject_is_not_acquired(pipeline, dispatcher):
    keypoints = make_keypoints(mid=(FRAME_WIDTH * 0.7, 360), wrists={RIGHT_WRIST: (1.5, 0.0, 0.9)})

    snapshot = pipeline.process(keypoints, FRAME_WIDTH)

    assert not snapshot.is_tracking
    assert dispatcher.events == []


def test_tracking_survives_gap_scale(pipeline):
    pipeline.process(running(), FRAME_WIDTH)

    snapshot = pipeline.process(make_keypoints(scale=25, wrists={RIGHT_WRIST: (1.5, 0.0, 0.9)}), FRAME_WIDTH)

    assert snapshot.is_tracking


def test_jump_repeats_while_arms_up(pipeline, dispatcher, clock):
    arms_up = running(nx=0.0, ny=-1.5)

    assert pipeline.process(arms_up, FRAME_WIDTH).label == "JUMP"
    for _ in range(50):
        clock.advance(0.01)
        pipeline.process(arms_up, FRAME_WIDTH)

    assert dispatcher.presses(KeyId.JUMP) == [KeyId.JUMP, KeyId.JUMP]
    assert dispatcher.releases(KeyId.JUMP) == [KeyId.JUMP]


def test_pause_releases_keys(pipeline, dispatcher, clock):
    pipeline.process(running(ny=-1.5), FRAME_WIDTH)
    assert pipeline.jump.phase is JumpPhase.HELD

    pipeline.pause.request_toggle()
    snapshot = pipeline.process(running(), FRAME_WIDTH)

    assert snapshot.paused
    assert snapshot.held_keys == frozenset()
    assert pipeline.synchronizer.held == frozenset()
    assert pipeline.jump.phase is JumpPhase.IDLE

    clock.advance(10)
    assert pipeline.process(running(), FRAME_WIDTH).paused
    assert dispatcher.presses(KeyId.FORWARD) == [KeyId.FORWARD]


def test_resume_countdown_then_control(pipeline, clock):
    pipeline.pause.request_toggle()
    pipeline.process(running(), FRAME_WIDTH)
    pipeline.pause.request_toggle()

    snapshot = pipeline.process(running(), FRAME_WIDTH)
    assert snapshot.resuming and snapshot.resume_count == 3
    assert snapshot.held_keys == frozenset()

    clock.advance(3.0)
    snapshot = pipeline.process(running(), FRAME_WIDTH)
    assert not snapshot.paused
    assert snapshot.held_keys == {KeyId.FORWARD}


def test_release_all(pipeline, dispatcher):
    pipeline.process(running(nx=2.5), FRAME_WIDTH)

    pipeline.release_all()

    assert pipeline.synchronizer.held == frozenset()
    assert len(dispatcher.releases()) == 2
