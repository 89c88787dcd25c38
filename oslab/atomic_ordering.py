"""Publishing a value between threads and one-time initialisation."""

from __future__ import annotations

import threading
from typing import Optional

_U32_MASK = (1 << 32) - 1


def _check_u32(value: int, name: str) -> None:
    if not 0 <= value <= _U32_MASK:
        raise ValueError(f"{name} must fit in an unsigned 32-bit integer, got {value}")


class FlagChannel:
    """Single-slot channel: a producer stores a value, then raises a ready flag."""

    __slots__ = ("_data", "_ready")

    def __init__(self) -> None:
        self._data = 0
        self._ready = threading.Event()

    def produce(self, value: int) -> None:
        """Store ``value`` and mark the channel ready."""
        _check_u32(value, "value")
        self._data = value
        self._ready.set()

    def consume(self) -> int:
        """Wait until the channel is ready, then return the stored value."""
        self._ready.wait()
        return self._data

    def reset(self) -> None:
        """Clear the ready flag and the stored value."""
        self._ready.clear()
        self._data = 0


class OnceCell:
    """A cell that can be initialised exactly once."""

    __slots__ = ("_value", "_initialized", "_lock")

    def __init__(self) -> None:
        self._value = 0
        self._initialized = False
        self._lock = threading.Lock()

    def init(self, val: int) -> bool:
        """Store ``val`` if the cell is empty; return whether this call stored it."""
        _check_u32(val, "val")
        with self._lock:
            if self._initialized:
                return False
            self._value = val
            self._initialized = True
            return True

    def get(self) -> Optional[int]:
        """Return the stored value, or None if the cell is still empty."""
        with self._lock:
            return self._value if self._initialized else None