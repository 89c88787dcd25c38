"""A writer-priority read-write lock."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")

MAX_READERS = (1 << 30) - 1
"""Largest number of readers that may hold the lock at once."""


class RwLock(Generic[T]):
    """Read-write lock: many readers or one writer, waiting writers go first.

    Once a writer is waiting, new readers are held back until it has run.
    """

    __slots__ = ("_data", "_cond", "_readers", "_writer_holding", "_writers_waiting")

    def __init__(self, data: T) -> None:
        self._data = data
        self._cond = threading.Condition()
        self._readers = 0
        self._writer_holding = False
        self._writers_waiting = 0

    def _may_read(self) -> bool:
        return (
            not self._writer_holding
            and self._writers_waiting == 0
            and self._readers < MAX_READERS
        )

    def _may_write(self) -> bool:
        return not self._writer_holding and self._readers == 0

    def read(self) -> "RwLockReadGuard[T]":
        """Block until no writer holds or waits for the lock, then take a read lock."""
        with self._cond:
            self._cond.wait_for(self._may_read)
            self._readers += 1
        return RwLockReadGuard(self)

    def write(self) -> "RwLockWriteGuard[T]":
        """Block until no readers and no other writer hold the lock, then take it."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(self._may_write)
            finally:
                self._writers_waiting -= 1
            self._writer_holding = True
        return RwLockWriteGuard(self)

    def _release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            self._cond.notify_all()

    def _release_write(self) -> None:
        with self._cond:
            self._writer_holding = False
            self._cond.notify_all()


class _Guard(Generic[T]):
    __slots__ = ("_lock", "_held")

    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("guard has already been released")

    def _unlock(self) -> None:
        raise NotImplementedError

    def release(self) -> None:
        """Release the lock; later calls do nothing."""
        if self._held:
            self._held = False
            self._unlock()

    def __enter__(self):
        return self

    def __exit__(self, *args) -> None:
        self.release()


class RwLockReadGuard(_Guard[T]):
    """Shared access to the data of an ``RwLock``."""

    __slots__ = ()

    @property
    def value(self) -> T:
        """The protected data."""
        self._check_held()
        return self._lock._data

    def _unlock(self) -> None:
        self._lock._release_read()

    def release(self) -> None:
        """Release the read lock; later calls do nothing."""
        super().release()

    def __enter__(self) -> "RwLockReadGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        self.release()


class RwLockWriteGuard(_Guard[T]):
    """Exclusive access to the data of an ``RwLock``."""

    __slots__ = ()

    @property
    def value(self) -> T:
        """The protected data."""
        self._check_held()
        return self._lock._data

    @value.setter
    def value(self, new_value: T) -> None:
        self._check_held()
        self._lock._data = new_value

    def _unlock(self) -> None:
        self._lock._release_write()

    def release(self) -> None:
        """Release the write lock; later calls do nothing."""
        super().release()

    def __enter__(self) -> "RwLockWriteGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        self.release()