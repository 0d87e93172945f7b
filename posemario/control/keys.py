"""
Held-key bookkeeping.

The KeySynchronizer is the only place that presses or releases virtual keys.
It keeps the set of keys currently held down and converges it to the keys
the classifier wants with the minimum number of press / release calls.
"""

import logging
from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Set, Tuple

from posemario.control.types import KeyId

logger = logging.getLogger(__name__)


class KeyDispatcher(ABC):
    """
    Sends key events to the operating system.
    """

    @abstractmethod
    def press(self, key: KeyId) -> None:
        pass

    @abstractmethod
    def release(self, key: KeyId) -> None:
        pass


class LoggingKeyDispatcher(KeyDispatcher):
    """
    Dispatcher that only logs key events (dry run).
    """

    def press(self, key: KeyId) -> None:
        logger.info(f"[dry run] press {key.value}")

    def release(self, key: KeyId) -> None:
        logger.info(f"[dry run] release {key.value}")


class KeySynchronizer:
    """
    Converges the held-key set to a desired set.

    A key is only pressed when it is not held, and only released when it is
    held, so the game never sees two presses without a release in between.
    """

    def __init__(self, dispatcher: KeyDispatcher):
        self.dispatcher = dispatcher
        self._held: Set[KeyId] = set()

    @property
    def held(self) -> FrozenSet[KeyId]:
        """Keys currently held down."""
        return frozenset(self._held)

    def sync(self, desired: Iterable[KeyId]) -> Tuple[FrozenSet[KeyId], FrozenSet[KeyId]]:
        """
        Press and release keys until the held set equals `desired`.

        Returns:
            tuple: (pressed, released) keys
        """
        desired = frozenset(desired)
        to_release = frozenset(self._held - desired)
        to_press = frozenset(desired - self._held)

        for key in to_release:
            self.dispatcher.release(key)
            self._held.discard(key)
            logger.debug(f"Released {key.value}")

        for key in to_press:
            self.dispatcher.press(key)
            self._held.add(key)
            logger.debug(f"Pressed {key.value}")

        return to_press, to_release

    def release_all(self) -> FrozenSet[KeyId]:
        """
        Release every held key.

        Every key is removed from the held set even if releasing another one
        failed; the first failure is re-raised afterwards.

        Returns:
            frozenset: Keys that were held
        """
        released = frozenset(self._held)
        error = None
        for key in released:
            self._held.discard(key)
            try:
                self.dispatcher.release(key)
            except Exception as e:
                logger.error(f"Error releasing key {key.value}: {e}", exc_info=True)
                if error is None:
                    error = e

        if released:
            logger.debug(f"Released all keys: {sorted(k.value for k in released)}")
        if error is not None:
            raise error
        return released
