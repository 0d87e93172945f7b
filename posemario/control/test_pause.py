"""
Tests for pause and the resume countdown.
"""

from posemario.control.pause import PauseController


def test_starts_active(clock):
    assert PauseController(clock=clock).update().active


def test_toggle_pauses_immediately(clock):
    pause = PauseController(countdown=3.0, clock=clock)
    pause.request_toggle()

    state = pause.update()

    assert state.paused and not state.resuming
    assert not state.active


def test_resume_countdown(clock):
    pause = PauseController(countdown=3.0, clock=clock)
    pause.request_toggle()
    pause.update()

    pause.request_toggle()
    state = pause.update()
    assert state.resuming and state.resume_count == 3

    clock.advance(0.5)
    assert pause.update().resume_count == 3
    clock.advance(1.0)
    assert pause.update().resume_count == 2

    clock.advance(1.5)
    state = pause.update()
    assert state.active
    assert not pause.paused


def test_toggle_ignored_during_countdown(clock):
    pause = PauseController(countdown=3.0, clock=clock)
    pause.request_toggle()
    pause.update()
    pause.request_toggle()
    pause.update()

    clock.advance(1.0)
    pause.request_toggle()
    state = pause.update()

    assert state.resuming
    clock.advance(2.0)
    assert pause.update().active


def test_request_is_applied_once(clock):
    pause = PauseController(clock=clock)
    pause.request_toggle()
    pause.request_toggle()

    assert pause.update().paused
    assert pause.update().paused
