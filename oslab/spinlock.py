"""A basic busy-waiting lock with explicit lock and unlock calls."""

from __future__ import annotations

import threading
import time
from typing import Generic, TypeVar

T = TypeVar("T")


class SpinLock(Generic[T]):
    """Spin lock protecting ``data``; callers pair ``lock`` with ``unlock``."""

    __slots__ = ("data", "_flag")

    def __init__(self, data: T) -> None:
        self.data = data
        self._flag = threading.Lock()

    def lock(self) -> T:
        """Spin until the lock is held, then return the protected data."""
        while not self._flag.acquire(blocking=False):
            time.sleep(0)
        return self.data

    def unlock(self) -> None:
        """Release the lock; releasing a free lock has no effect."""
        try:
            self._flag.release()
        except RuntimeError:
            pass

    def try_lock(self) -> bool:
        """Take the lock if it is free, without spinning; return whether it was taken."""
        return self._flag.acquire(blocking=False)