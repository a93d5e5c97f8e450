"""Virtual clock ordering and cancellation."""

import asyncio
from datetime import datetime, timedelta

import pytest

from honeynet.scheduler import AsyncioScheduler, VirtualScheduler


def test_runs_due_callbacks_in_order():
    clock = VirtualScheduler()
    seen = []
    clock.call_later(2, lambda: seen.append("b"))
    clock.call_later(1, lambda: seen.append("a"))
    clock.call_later(2, lambda: seen.append("c"))
    assert clock.advance(1.5) == 1
    assert seen == ["a"]
    clock.advance(0.5)
    assert seen == ["a", "b", "c"]
    assert clock.now() == 2.0


def test_cancelled_timer_never_runs():
    clock = VirtualScheduler()
    seen = []
    timer = clock.call_later(1, lambda: seen.append(1))
    timer.cancel()
    clock.advance(5)
    assert seen == []
    assert clock.pending() == 0


def test_callbacks_scheduled_while_advancing():
    clock = VirtualScheduler()
    fired = []

    def repeat():
        fired.append(clock.now())
        clock.call_later(1, repeat)

    clock.call_later(1, repeat)
    clock.advance(3)
    assert fired == [1.0, 2.0, 3.0]


def test_timestamp_follows_virtual_time():
    origin = datetime(2024, 1, 1)
    clock = VirtualScheduler(origin=origin)
    clock.advance(90)
    assert clock.timestamp() == origin + timedelta(seconds=90)


def test_negative_values_rejected():
    clock = VirtualScheduler()
    with pytest.raises(ValueError):
        clock.advance(-1)
    with pytest.raises(ValueError):
        clock.call_later(-1, lambda: None)


def test_asyncio_scheduler_runs_and_cancels():
    seen = []

    async def scenario():
        clock = AsyncioScheduler()
        clock.call_later(0.01, lambda: seen.append("kept"))
        clock.call_later(0.01, lambda: seen.append("dropped")).cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert seen == ["kept"]
