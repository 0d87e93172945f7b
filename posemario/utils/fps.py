import time
from typing import Callable


class FpsCounter:
    """
    Frame rate estimate refreshed once per measurement window.
    """

    def __init__(self, window: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        assert window > 0

        self.window = window
        self._clock = clock
        self._count = 0
        self._start = clock()
        self.fps = 0.0

    def tick(self) -> float:
        """
        Count one frame and return the current estimate.
        """
        self._count += 1
        now = self._clock()
        elapsed = now - self._start
        if elapsed >= self.window:
            self.fps = self._count / elapsed
            self._count = 0
            self._start = now
        return self.fps

    def reset(self) -> None:
        """
        Forget the frames counted so far.
        """
        self._count = 0
        self._start = self._clock()
        self.fps = 0.0
