"""Timeouts and races between awaitables."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_ms: int) -> Optional[T]:
    """Return the awaitable's result, or None if it takes longer than ``timeout_ms``."""
    try:
        return await asyncio.wait_for(awaitable, timeout_ms / 1000)
    except asyncio.TimeoutError:
        return None


async def race(first: Awaitable[T], second: Awaitable[T]) -> T:
    """Return the result of whichever awaitable finishes first; cancel the other."""
    tasks = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
    winner = next(task for task in tasks if task in done)
    return winner.result()