import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from posemario.config import PauseConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PauseState:
    paused: bool = False
    resuming: bool = False
    resume_count: int = 0
    "Whole seconds left in the resume countdown."

    @property
    def active(self) -> bool:
        """Whether poses should drive the keys."""
        return not self.paused and not self.resuming


class PauseController:
    """
    Pause with a countdown on resume.

    `request_toggle` may be called from any thread (window key handler, button).
    The request is applied by `update`, which only the inference thread calls,
    so the pause state itself has a single owner.
    """

    def __init__(self, countdown=None, clock: Callable[[], float] = time.monotonic):
        self.countdown = countdown if countdown is not None else PauseConfig.RESUME_COUNTDOWN
        self._clock = clock
        self._toggle_requested = threading.Event()
        self.paused = False
        self.resume_end: Optional[float] = None

    def request_toggle(self) -> None:
        self._toggle_requested.set()

    def update(self) -> PauseState:
        """
        Apply a pending toggle request and advance the countdown.
        """
        now = self._clock()

        if self._toggle_requested.is_set():
            self._toggle_requested.clear()
            if self.resume_end is not None:
                logger.debug("Pause toggle ignored during resume countdown")
            elif self.paused:
                self.resume_end = now + self.countdown
                logger.info(f"Resuming in {self.countdown:.0f}s")
            else:
                self.paused = True
                logger.info("Paused")

        if self.resume_end is not None and now >= self.resume_end:
            self.paused = False
            self.resume_end = None
            logger.info("Resumed")

        if self.resume_end is not None:
            return PauseState(paused=True, resuming=True,
                              resume_count=int(math.ceil(self.resume_end - now)))
        return PauseState(paused=self.paused)
