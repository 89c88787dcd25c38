"""A thread-safe unsigned 64-bit counter with atomic read-modify-write operations."""

from __future__ import annotations

import threading
from typing import Callable

_U64_MASK = (1 << 64) - 1


def _check_u64(value: int, name: str) -> None:
    if not 0 <= value <= _U64_MASK:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, got {value}")


class AtomicCounter:
    """Unsigned 64-bit counter whose updates are atomic and wrap on overflow."""

    __slots__ = ("_value", "_lock")

    def __init__(self, init: int = 0) -> None:
        _check_u64(init, "init")
        self._value = init
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"AtomicCounter({self.get()})"

    def _fetch_update(self, update: Callable[[int], int]) -> int:
        with self._lock:
            previous = self._value
            self._value = update(previous) & _U64_MASK
            return previous

    def increment(self) -> int:
        """Add one and return the value before the increment."""
        return self._fetch_update(lambda value: value + 1)

    def decrement(self) -> int:
        """Subtract one and return the value before the decrement."""
        return self._fetch_update(lambda value: value - 1)

    def get(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value

    def compare_and_swap(self, expected: int, new_val: int) -> int:
        """Store ``new_val`` if the current value equals ``expected``.

        Returns the value found before the operation; the swap took place
        exactly when that value equals ``expected``.
        """
        _check_u64(new_val, "new_val")
        with self._lock:
            current = self._value
            if current == expected:
                self._value = new_val
            return current

    def fetch_multiply(self, multiplier: int) -> int:
        """Multiply the value atomically and return the value before it."""
        _check_u64(multiplier, "multiplier")
        while True:
            current = self.get()
            new = (current * multiplier) & _U64_MASK
            if self.compare_and_swap(current, new) == current:
                return current