from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gsu.timing.scheduler import ManualScheduler
from gsu.timing.throttle import throttle


def test_leading_edge_with_cooldown():
    scheduler = ManualScheduler()
    fired = []
    wrapper = throttle(lambda tag: fired.append((scheduler.now(), tag)), 1.0, scheduler)

    assert wrapper("t0") is True
    scheduler.run_pending()
    scheduler.advance(0.3)
    assert wrapper("t0.3") is False
    scheduler.advance(0.8)
    assert wrapper.ready
    assert wrapper("t1.1") is True
    scheduler.run_pending()

    assert [tag for _, tag in fired] == ["t0", "t1.1"]
    assert fired[0][0] == 0.0
    assert fired[1][0] == pytest.approx(1.1)
    assert wrapper.dropped == 1


def test_dropped_calls_are_never_replayed():
    scheduler = ManualScheduler()
    fired = []
    wrapper = throttle(fired.append, 1.0, scheduler)
    for i in range(10):
        wrapper(i)
    scheduler.advance(5.0)
    assert fired == [0]


def test_fire_is_handed_to_scheduler():
    scheduler = ManualScheduler()
    fired = []
    wrapper = throttle(fired.append, 1.0, scheduler)
    wrapper("now")
    assert fired == []
    scheduler.run_pending()
    assert fired == ["now"]


def test_reset_ends_cooldown():
    scheduler = ManualScheduler()
    fired = []
    wrapper = throttle(fired.append, 10.0, scheduler)
    wrapper(1)
    wrapper.reset()
    wrapper.reset()
    assert wrapper(2) is True
    scheduler.run_pending()
    assert fired == [1, 2]


def test_cooldown_survives_callback_error():
    scheduler = ManualScheduler()

    def cb():
        raise RuntimeError("handler failed")

    wrapper = throttle(cb, 1.0, scheduler)
    wrapper()
    with pytest.raises(RuntimeError):
        scheduler.run_pending()
    assert wrapper() is False
    scheduler.advance(1.0)
    assert wrapper.ready


def test_throttle_on_event_loop():
    async def scenario():
        fired = []
        wrapper = throttle(fired.append, 0.05)
        wrapper("a")
        wrapper("b")
        await asyncio.sleep(0.08)
        wrapper("c")
        await asyncio.sleep(0.01)
        return fired

    assert asyncio.run(scenario()) == ["a", "c"]


def test_reset_after_cooldown_ended_is_noop():
    scheduler = ManualScheduler()
    fired = []
    wrapper = throttle(fired.append, 1.0, scheduler)
    wrapper("a")
    scheduler.advance(1.5)
    assert wrapper.ready
    wrapper.reset()
    wrapper.reset()
    assert wrapper.ready
    assert wrapper("b") is True
    scheduler.run_pending()
    assert fired == ["a", "b"]
    assert wrapper("c") is False
