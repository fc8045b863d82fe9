"""Tests for bonus module."""
import random

import pytest

from gravitypoop.bonus import BonusEventEngine, BonusStatus
from gravitypoop.catalog import define_game
from gravitypoop.definition import GameConfig
from gravitypoop.scheduler import Scheduler
from gravitypoop.state import PlayerState


class FixedRandom(random.Random):
    """Returns queued values from random()."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


def _make_engine(rng=None):
    sched = Scheduler()
    engine = BonusEventEngine(GameConfig(), sched, rng or random.Random(1))
    state = PlayerState(define_game())
    return engine, sched, state


def test_roll_spawns_below_threshold():
    engine, _sched, _state = _make_engine(FixedRandom([0.5, 1 / 300 - 1e-6, 1 / 300]))
    assert engine.roll() is None
    event = engine.roll()
    assert event is not None
    assert event.active
    assert engine.roll() is None  # value == chance does not spawn
    assert len(engine.visible_events()) == 1


def test_spawn_rate_roughly_one_in_300():
    engine, _sched, _state = _make_engine(random.Random(1234))
    spawned = sum(1 for _ in range(300_000) if engine.roll() is not None)
    assert 850 <= spawned <= 1150


def test_uncollected_event_expires_after_display_duration():
    engine, sched, state = _make_engine()
    event = engine.spawn()
    assert event.expires_at == pytest.approx(10.0)
    sched.advance(9.9)
    assert event.status is BonusStatus.VISIBLE
    sched.advance(0.1)
    assert event.status is BonusStatus.EXPIRED
    assert engine.visible_events() == []
    assert engine.collect(event.handle, state) is None
    assert state.global_multiplier == 1.0


def test_collect_doubles_and_reverts_after_60_seconds():
    engine, sched, state = _make_engine()
    event = engine.spawn()
    sched.advance(3.0)
    assert engine.collect(event.handle, state) is event
    assert event.status is BonusStatus.COLLECTED
    assert event.bonus_ends_at == pytest.approx(63.0)
    assert state.global_multiplier == 2.0

    sched.advance(59.9)
    assert state.global_multiplier == 2.0
    sched.advance(0.1)
    assert state.global_multiplier == 1.0
    assert engine.active_boosts() == []


def test_collect_twice_is_rejected():
    engine, _sched, state = _make_engine()
    event = engine.spawn()
    engine.collect(event.handle, state)
    assert engine.collect(event.handle, state) is None
    assert state.global_multiplier == 2.0


def test_overlapping_collections_stack_and_expire_independently():
    engine, sched, state = _make_engine()
    first = engine.spawn()
    engine.collect(first.handle, state)
    sched.advance(20.0)
    second = engine.spawn()
    engine.collect(second.handle, state)
    assert state.global_multiplier == 4.0
    assert len(engine.active_boosts()) == 2

    sched.advance(40.0)  # t=60: first reverts
    assert state.global_multiplier == 2.0
    sched.advance(20.0)  # t=80: second reverts
    assert state.global_multiplier == 1.0


def test_cancel_boosts_drops_pending_reversals():
    engine, sched, state = _make_engine()
    event = engine.spawn()
    engine.collect(event.handle, state)
    assert engine.cancel_boosts() == 1
    state.global_multiplier = 1.0
    sched.advance(120.0)
    assert state.global_multiplier == 1.0


def test_handles_are_unique():
    engine, _sched, _state = _make_engine()
    handles = {engine.spawn().handle for _ in range(5)}
    assert len(handles) == 5
