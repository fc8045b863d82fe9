"""Tests for scheduler module."""
import pytest

from gravitypoop.scheduler import Scheduler


def test_call_later_fires_once():
    sched = Scheduler()
    fired = []
    sched.call_later(5.0, lambda: fired.append(sched.now))
    sched.advance(4.9)
    assert fired == []
    sched.advance(0.1)
    assert fired == [pytest.approx(5.0)]
    sched.advance(100)
    assert len(fired) == 1


def test_clock_advances_to_target():
    sched = Scheduler(start_time=10.0)
    sched.advance(2.5)
    assert sched.now == pytest.approx(12.5)


def test_callbacks_see_due_time():
    sched = Scheduler()
    seen = []
    sched.call_later(3.0, lambda: seen.append(sched.now))
    sched.advance(10.0)
    assert seen == [3.0]
    assert sched.now == 10.0


def test_call_every_does_not_drift():
    sched = Scheduler()
    ticks = []
    sched.call_every(0.1, lambda: ticks.append(sched.now))
    sched.advance(10.0)
    assert len(ticks) == 100
    assert ticks[-1] == pytest.approx(10.0)


def test_call_every_in_small_steps():
    sched = Scheduler()
    count = []
    sched.call_every(1.0, lambda: count.append(1))
    for _ in range(50):
        sched.advance(0.1)
    assert len(count) == 5


def test_ordering_by_time_then_insertion():
    sched = Scheduler()
    order = []
    sched.call_later(2.0, lambda: order.append("b"))
    sched.call_later(1.0, lambda: order.append("a"))
    sched.call_later(2.0, lambda: order.append("c"))
    sched.advance(2.0)
    assert order == ["a", "b", "c"]


def test_cancel():
    sched = Scheduler()
    fired = []
    task = sched.call_later(1.0, lambda: fired.append(1))
    task.cancel()
    assert sched.advance(2.0) == 0
    assert fired == []
    assert sched.pending() == []


def test_cancel_periodic():
    sched = Scheduler()
    fired = []
    task = sched.call_every(1.0, lambda: fired.append(1))
    sched.advance(3.0)
    task.cancel()
    sched.advance(3.0)
    assert len(fired) == 3


def test_callback_can_schedule_within_same_advance():
    sched = Scheduler()
    fired = []

    def first():
        fired.append("first")
        sched.call_later(1.0, lambda: fired.append("second"))

    sched.call_later(1.0, first)
    sched.advance(5.0)
    assert fired == ["first", "second"]


def test_advance_returns_fired_count():
    sched = Scheduler()
    sched.call_every(1.0, lambda: None)
    sched.call_later(0.5, lambda: None)
    assert sched.advance(3.0) == 4


def test_invalid_arguments():
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        sched.call_every(0.0, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-1.0)


def test_pending_lists_live_tasks_in_order():
    sched = Scheduler()
    sched.call_later(3.0, lambda: None, name="late")
    sched.call_later(1.0, lambda: None, name="early")
    assert [t.name for t in sched.pending()] == ["early", "late"]
