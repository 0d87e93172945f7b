from conftest import FakeClock
from posemario.utils import FpsCounter


def test_updates_once_per_window():
    clock = FakeClock()
    fps = FpsCounter(window=1.0, clock=clock)

    for _ in range(29):
        clock.advance(1 / 30)
        assert fps.tick() == 0.0

    clock.advance(0.05)
    assert abs(fps.tick() - 30.0) < 1.0


def test_reset():
    clock = FakeClock()
    fps = FpsCounter(window=0.5, clock=clock)
    clock.advance(1.0)
    fps.tick()
    assert fps.fps > 0

    fps.reset()

    assert fps.fps == 0.0
