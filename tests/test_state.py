"""Tests for state module."""
import dataclasses

import pytest

from gravitypoop.definition import GameConfig, GameDefinition
from gravitypoop.prestige import PrestigeStatus
from gravitypoop.producer import ProducerDef
from gravitypoop.state import PlayerState


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test"),
        producers=[
            ProducerDef("farm", base_cost=10, base_production_rate=1),
            ProducerDef("mine", base_cost=50, base_production_rate=4),
        ],
    )


def test_initialization():
    state = PlayerState(_make_definition())
    assert state.resource_count == 0.0
    assert state.total_resource_produced == 0.0
    assert state.click_count == 0
    assert state.prestige_currency == 0
    assert state.pps == 0.0
    assert state.global_multiplier == 1.0
    assert state.unlocked_achievements == []
    assert state.prestige_status is PrestigeStatus.LOCKED
    assert list(state.producers) == ["farm", "mine"]


def test_producer_count():
    state = PlayerState(_make_definition())
    assert state.producer_count("farm") == 0
    state.producers["farm"].owned_count = 5
    assert state.producer_count("farm") == 5


def test_producer_count_unknown():
    state = PlayerState(_make_definition())
    assert state.producer_count("nonexistent") == 0


def test_has_achievement():
    state = PlayerState(_make_definition())
    assert not state.has_achievement("ACH01")
    state.unlocked_achievements.append("ACH01")
    assert state.has_achievement("ACH01")


def test_snapshot_copies_values():
    state = PlayerState(_make_definition())
    state.resource_count = 42.0
    state.producers["mine"].owned_count = 2
    state.unlocked_achievements.append("ACH01")

    snap = state.snapshot()
    state.resource_count = 0.0
    state.producers["mine"].owned_count = 9
    state.unlocked_achievements.append("ACH02")

    assert snap.resource_count == 42.0
    assert snap.producer_count("mine") == 2
    assert snap.unlocked_achievements == ("ACH01",)


def test_snapshot_is_read_only():
    snap = PlayerState(_make_definition()).snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.resource_count = 10.0
    with pytest.raises(TypeError):
        snap.producer_counts["farm"] = 3
