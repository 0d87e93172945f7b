"""
Tests for the thread handoff slots.
"""

import threading

from posemario.utils import FrameHandoff, LatestValue


def test_handoff_drops_when_full():
    handoff = FrameHandoff()

    assert handoff.offer("a")
    assert not handoff.offer("b")
    assert handoff.dropped == 1
    assert handoff.take(timeout=0.01) == "a"
    assert not handoff.pending()


def test_handoff_take_times_out():
    assert FrameHandoff().take(timeout=0.01) is None


def test_handoff_accepts_after_take():
    handoff = FrameHandoff()
    handoff.offer(1)
    handoff.take()

    assert handoff.offer(2)
    assert handoff.pending()
    assert handoff.take() == 2


def test_handoff_across_threads():
    handoff = FrameHandoff()
    received = []

    def consume():
        received.append(handoff.take(timeout=2.0))

    consumer = threading.Thread(target=consume)
    consumer.start()
    handoff.offer("frame")
    consumer.join(timeout=2.0)

    assert received == ["frame"]


def test_latest_value_overwrites():
    value = LatestValue()
    assert value.get() is None
    assert value.version == 0

    value.publish(1)
    value.publish(2)

    assert value.get() == 2
    assert value.version == 2


def test_latest_value_initial():
    assert LatestValue("start").get() == "start"
