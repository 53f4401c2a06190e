"""Single-slot latest-value cell for handing snapshots between threads."""

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class LatestValue(Generic[T]):
    """
    Holds the most recently published value.

    Publishing overwrites the previous value; reading never blocks on the
    producer and never consumes the value. Publish immutable objects only:
    readers get the same reference the producer handed over.
    """

    def __init__(self, initial: Optional[T] = None) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = initial

    def publish(self, value: T) -> None:
        """Replace the held value."""
        with self._lock:
            self._value = value

    def get(self) -> Optional[T]:
        """Return the latest value, or None if nothing was published yet."""
        with self._lock:
            return self._value
