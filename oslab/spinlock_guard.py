"""A spin lock whose guard releases it when the guarded block ends."""

from __future__ import annotations

from typing import Generic, TypeVar

from oslab.spinlock import SpinLock

T = TypeVar("T")


class GuardedSpinLock(Generic[T]):
    """Spin lock that hands out a ``SpinGuard`` for access to its data."""

    __slots__ = ("_inner",)

    def __init__(self, data: T) -> None:
        self._inner = SpinLock(data)

    def lock(self) -> "SpinGuard[T]":
        """Spin until the lock is held and return a guard for it."""
        self._inner.lock()
        return SpinGuard(self._inner)


class SpinGuard(Generic[T]):
    """Holds a spin lock; gives access through ``value`` and releases on exit."""

    __slots__ = ("_lock", "_held")

    def __init__(self, lock: SpinLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("guard has already been released")

    @property
    def value(self) -> T:
        """The protected data."""
        self._check_held()
        return self._lock.data

    @value.setter
    def value(self, new_value: T) -> None:
        self._check_held()
        self._lock.data = new_value

    def release(self) -> None:
        """Release the lock; later calls do nothing."""
        if self._held:
            self._held = False
            self._lock.unlock()

    def __enter__(self) -> "SpinGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        self.release()