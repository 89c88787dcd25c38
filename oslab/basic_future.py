"""Hand-written awaitables that suspend a set number of times."""

from __future__ import annotations

from typing import Generator


class CountDown:
    """Awaitable that suspends once per count, then returns ``"liftoff!"``."""

    __slots__ = ("count",)

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        self.count = count

    def __await__(self) -> Generator[None, None, str]:
        while self.count > 0:
            self.count -= 1
            yield
        return "liftoff!"


class YieldOnce:
    """Awaitable that suspends exactly once before completing."""

    __slots__ = ("yielded",)

    def __init__(self) -> None:
        self.yielded = False

    def __await__(self) -> Generator[None, None, None]:
        if not self.yielded:
            self.yielded = True
            yield