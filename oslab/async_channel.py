"""Producer-consumer pipelines over bounded asyncio queues."""

from __future__ import annotations

import asyncio
from typing import List

_CLOSED = object()


async def _collect(queue: "asyncio.Queue[object]", producers: int) -> List[str]:
    """Receive items until every producer has signalled that it is done."""
    received: List[str] = []
    open_producers = producers
    while open_producers:
        item = await queue.get()
        if item is _CLOSED:
            open_producers -= 1
        else:
            received.append(item)  # type: ignore[arg-type]
    return received


async def producer_consumer(items: List[str]) -> List[str]:
    """Send ``items`` through a bounded queue and return them as received, in order."""
    queue: asyncio.Queue[object] = asyncio.Queue(maxsize=max(len(items), 1))

    async def produce() -> None:
        for item in items:
            await queue.put(item)
        await queue.put(_CLOSED)

    producer = asyncio.create_task(produce())
    consumer = asyncio.create_task(_collect(queue, 1))
    await producer
    return await consumer


async def fan_in(n_producers: int) -> List[str]:
    """Gather one message from each of ``n_producers`` producers, sorted."""
    queue: asyncio.Queue[object] = asyncio.Queue(maxsize=max(n_producers, 1))

    async def produce(producer_id: int) -> None:
        await queue.put(f"producer {producer_id}: message")
        await queue.put(_CLOSED)

    consumer = asyncio.create_task(_collect(queue, n_producers))
    producers = [asyncio.create_task(produce(i)) for i in range(n_producers)]
    await asyncio.gather(*producers)
    return sorted(await consumer)