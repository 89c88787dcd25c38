import pytest

from oslab.basic_future import CountDown, YieldOnce


def _drive(awaitable):
    """Step an awaitable by hand; return (number of suspensions, result)."""
    steps = 0
    gen = awaitable.__await__()
    while True:
        try:
            next(gen)
        except StopIteration as stop:
            return steps, stop.value
        steps += 1


@pytest.mark.asyncio
async def test_countdown_zero():
    assert await CountDown(0) == "liftoff!"


@pytest.mark.asyncio
async def test_countdown_three():
    assert await CountDown(3) == "liftoff!"


@pytest.mark.asyncio
async def test_yield_once():
    fut = YieldOnce()
    result = await fut
    assert result is None
    assert fut.yielded is True


@pytest.mark.asyncio
async def test_countdown_large():
    assert await CountDown(100) == "liftoff!"


def test_countdown_suspends_count_times():
    cd = CountDown(3)
    assert _drive(cd) == (3, "liftoff!")
    assert cd.count == 0


def test_yield_once_suspends_once():
    assert _drive(YieldOnce()) == (1, None)


def test_countdown_rejects_negative():
    with pytest.raises(ValueError):
        CountDown(-1)