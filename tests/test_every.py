from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gsu.timing.every import RepeatingTimer, every
from gsu.timing.scheduler import ManualScheduler


def test_every_fires_three_times_in_three_seconds():
    scheduler = ManualScheduler()
    elapsed = []
    every(1.0, elapsed.append, scheduler)
    scheduler.advance(3.05)
    assert len(elapsed) == 3
    assert all(e >= 1.0 for e in elapsed)


def test_callbacks_run_at_scheduled_times():
    scheduler = ManualScheduler()
    times = []
    timer = every(1.0, lambda e: times.append(scheduler.now()), scheduler)
    scheduler.advance(2.0)
    assert times == [1.0, 2.0]
    assert timer.invocations == 2


def test_cancel_stops_future_calls_and_is_idempotent():
    scheduler = ManualScheduler()
    calls = []
    timer = every(0.5, calls.append, scheduler)
    scheduler.advance(1.0)
    timer.cancel()
    timer.cancel()
    scheduler.advance(5.0)
    assert len(calls) == 2
    assert not timer.active
    assert scheduler.pending == 0


def test_cancel_from_inside_callback():
    scheduler = ManualScheduler()
    calls = []

    def cb(elapsed):
        calls.append(elapsed)
        if len(calls) == 2:
            timer.cancel()

    timer = every(1.0, cb, scheduler)
    scheduler.advance(10.0)
    assert len(calls) == 2
    assert scheduler.pending == 0


def test_callback_error_surfaces_and_stops_timer():
    scheduler = ManualScheduler()

    def cb(elapsed):
        raise KeyError("missing")

    timer = every(1.0, cb, scheduler)
    with pytest.raises(KeyError):
        scheduler.advance(1.5)
    assert timer.failed
    assert not timer.active
    scheduler.advance(5.0)
    assert timer.invocations == 1
    timer.cancel()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        RepeatingTimer(0, lambda e: None, ManualScheduler())


def test_every_on_event_loop():
    async def scenario():
        elapsed = []
        timer = every(0.02, elapsed.append)
        await asyncio.sleep(0.11)
        timer.cancel()
        count = len(elapsed)
        await asyncio.sleep(0.05)
        return count, elapsed

    count, elapsed = asyncio.run(scenario())
    assert count >= 2
    assert len(elapsed) == count


def test_elapsed_exceeds_interval_when_loop_is_busy():
    async def scenario():
        loop = asyncio.get_running_loop()
        elapsed = []
        timer = every(0.02, elapsed.append)
        # blocks the loop past the first deadline
        loop.call_later(0.005, time.sleep, 0.06)
        await asyncio.sleep(0.1)
        timer.cancel()
        return elapsed

    elapsed = asyncio.run(scenario())
    assert elapsed
    assert elapsed[0] >= 0.05
