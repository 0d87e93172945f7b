"""
Jump repeat state machine.

Holding the arms up keeps the jump key cycling through a long press and a
short release, the way a player mashes the jump button, so games that only
react to the press edge keep jumping.
"""

import logging
import time
from enum import Enum
from typing import Callable, Dict, Tuple

from posemario.config import JumpConfig

logger = logging.getLogger(__name__)


class JumpPhase(Enum):
    IDLE = "idle"
    HELD = "held"
    COOLDOWN = "cooldown"


class JumpDebouncer:
    """
    Converts a sustained jump trigger into a press / release cadence.

    Transitions while the trigger is true:

    ========  =================  =========  ===========
    phase     condition          next       jump key
    ========  =================  =========  ===========
    IDLE      always             HELD       down
    HELD      elapsed <= held    HELD       down
    HELD      elapsed > held     COOLDOWN   up
    COOLDOWN  elapsed <= cool    COOLDOWN   up
    COOLDOWN  elapsed > cool     HELD       down
    ========  =================  =========  ===========

    A false trigger returns to IDLE from any phase.
    """

    def __init__(self, held_duration=None, cooldown_duration=None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the debouncer.

        Args:
            held_duration (float): Seconds the key stays down. If None, uses config default.
            cooldown_duration (float): Seconds the key stays up between presses. If None, uses config default.
            clock: Monotonic time source in seconds
        """
        self.held_duration = held_duration if held_duration is not None else JumpConfig.HELD_DURATION
        self.cooldown_duration = (cooldown_duration if cooldown_duration is not None
                                  else JumpConfig.COOLDOWN_DURATION)
        self._clock = clock

        self.phase = JumpPhase.IDLE
        self.phase_start = 0.0

        # phase -> (timeout, next phase on timeout)
        self._timed: Dict[JumpPhase, Tuple[float, JumpPhase]] = {
            JumpPhase.HELD: (self.held_duration, JumpPhase.COOLDOWN),
            JumpPhase.COOLDOWN: (self.cooldown_duration, JumpPhase.HELD),
        }

    def _enter(self, phase: JumpPhase, now: float) -> None:
        logger.debug(f"Jump phase {self.phase.name} -> {phase.name}")
        self.phase = phase
        self.phase_start = now

    def update(self, trigger: bool) -> bool:
        """
        Advance the state machine by one frame.

        Args:
            trigger (bool): Whether the arms-up pose is present this frame

        Returns:
            bool: Whether the jump key should be down this frame
        """
        if not trigger:
            self.reset()
            return False

        now = self._clock()
        if self.phase is JumpPhase.IDLE:
            self._enter(JumpPhase.HELD, now)
        else:
            timeout, next_phase = self._timed[self.phase]
            if now - self.phase_start > timeout:
                self._enter(next_phase, now)

        return self.phase is JumpPhase.HELD

    def reset(self) -> None:
        """Return to IDLE (trigger released or tracking lost)."""
        if self.phase is not JumpPhase.IDLE:
            logger.debug(f"Jump phase {self.phase.name} -> IDLE")
        self.phase = JumpPhase.IDLE
        self.phase_start = 0.0
