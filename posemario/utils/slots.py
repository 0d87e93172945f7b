import queue
import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FrameHandoff(Generic[T]):
    """
    Single-slot handoff between one producer and one consumer thread.
    The slot holds at most one pending item. If the consumer has not taken the
    previous item yet, a new offer is dropped instead of blocking or queueing.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[T]" = queue.Queue(maxsize=1)
        self.dropped = 0
        """ Number of offers dropped because the slot was full. """

    def offer(self, item: T) -> bool:
        """
        Offer an item without blocking.
        Returns False if the slot was still full and the item was dropped.
        """
        try:
            self._queue.put_nowait(item)
            return True
        except queue.Full:
            self.dropped += 1
            return False

    def take(self, timeout: Optional[float] = None) -> Optional[T]:
        """
        Take the pending item, waiting up to `timeout` seconds.
        Returns None if nothing arrived in time.
        """
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def pending(self) -> bool:
        """
        Whether an item is waiting to be taken.
        """
        return not self._queue.empty()


class LatestValue(Generic[T]):
    """
    A published value that readers always see in its newest version.
    Publishing overwrites the previous value; readers may skip versions.
    """

    def __init__(self, initial: Optional[T] = None) -> None:
        self._value = initial
        self._version = 0
        self._lock = threading.Lock()

    def publish(self, value: T) -> None:
        """
        Replace the published value.
        """
        with self._lock:
            self._value = value
            self._version += 1

    def get(self) -> Optional[T]:
        """
        Return the newest published value.
        """
        with self._lock:
            return self._value

    @property
    def version(self) -> int:
        """
        Number of values published so far.
        """
        with self._lock:
            return self._version
