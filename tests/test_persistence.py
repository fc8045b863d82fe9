"""Tests for persistence module."""
import json

import pytest

from gravitypoop.catalog import define_game
from gravitypoop.errors import SaveLoadFailure
from gravitypoop.persistence import (
    JsonFileStore,
    MemoryStore,
    decode_save,
    dumps_save,
    encode_save,
    loads_save,
)
from gravitypoop.state import PlayerState


def _populated_state() -> PlayerState:
    state = PlayerState(define_game())
    state.resource_count = 1234.5
    state.total_resource_produced = 98765.25
    state.click_count = 17
    state.prestige_currency = 2
    state.global_multiplier = 4.0
    state.pps = 3.3
    state.unlocked_achievements = ["ACH01", "ACH04"]
    state.producers["toilet"].owned_count = 12
    state.producers["cow"].owned_count = 3
    return state


def test_encode_layout():
    record = encode_save(_populated_state())
    assert record == {
        "resourceCount": 1234.5,
        "totalResourceProduced": 98765.25,
        "clickCount": 17,
        "prestigeCurrency": 2,
        "unlockedAchievementIds": ["ACH01", "ACH04"],
        "producerCounts": {
            "toilet": 12,
            "cow": 3,
            "space_station": 0,
            "portal": 0,
            "solar_generator": 0,
            "cosmic_temple": 0,
        },
    }


def test_round_trip_keeps_durable_fields_only():
    state = loads_save(dumps_save(_populated_state()), define_game())
    assert state.resource_count == 1234.5
    assert state.total_resource_produced == 98765.25
    assert state.click_count == 17
    assert state.prestige_currency == 2
    assert state.unlocked_achievements == ["ACH01", "ACH04"]
    assert state.producer_count("toilet") == 12
    assert state.producer_count("cow") == 3
    # transient values are not saved
    assert state.global_multiplier == 1.0
    assert state.pps == 0.0


def test_missing_fields_default_to_zero():
    state = decode_save({}, define_game())
    assert state.resource_count == 0.0
    assert state.total_resource_produced == 0.0
    assert state.click_count == 0
    assert state.prestige_currency == 0
    assert state.unlocked_achievements == []
    assert all(ps.owned_count == 0 for ps in state.producers.values())


def test_unknown_producers_ignored_and_missing_default():
    state = decode_save(
        {"producerCounts": {"toilet": 4, "time_machine": 99}}, define_game()
    )
    assert state.producer_count("toilet") == 4
    assert "time_machine" not in state.producers
    assert state.producer_count("cow") == 0


def test_total_repaired_up_to_resource_count():
    state = decode_save(
        {"resourceCount": 500, "totalResourceProduced": 100}, define_game()
    )
    assert state.total_resource_produced == 500


def test_duplicate_achievements_collapsed():
    state = decode_save(
        {"unlockedAchievementIds": ["ACH01", "ACH01", "ACH02"]}, define_game()
    )
    assert state.unlocked_achievements == ["ACH01", "ACH02"]


def test_integral_floats_accepted_for_counts():
    state = decode_save(
        {"clickCount": 3.0, "producerCounts": {"cow": 2.0}}, define_game()
    )
    assert state.click_count == 3
    assert state.producer_count("cow") == 2


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        "[1, 2, 3]",
        "null",
        '{"resourceCount": "lots"}',
        '{"resourceCount": -5}',
        '{"resourceCount": NaN}',
        '{"clickCount": 1.5}',
        '{"prestigeCurrency": true}',
        '{"unlockedAchievementIds": "ACH01"}',
        '{"unlockedAchievementIds": [1]}',
        '{"producerCounts": [1]}',
        '{"producerCounts": {"toilet": -1}}',
        '{"unlockedAchievementIds": 0}',
        '{"unlockedAchievementIds": ""}',
        '{"producerCounts": false}',
        '{"producerCounts": 0}',
        '{"resourceCount": 1' + '0' * 400 + '}',
        '{"clickCount": 1' + '0' * 400 + '}',
        '{"producerCounts": {"toilet": 1' + '0' * 400 + '}}',
        '{"producerCounts": {"cosmic_temple": 1e306}}',
    ],
)
def test_corrupt_payloads_raise(payload):
    with pytest.raises(SaveLoadFailure):
        loads_save(payload, define_game())


def test_memory_store():
    store = MemoryStore()
    assert store.read("k") is None
    store.write("k", "v")
    assert store.read("k") == "v"


def test_json_file_store(tmp_path):
    store = JsonFileStore(tmp_path / "saves")
    assert store.read("slot") is None
    payload = dumps_save(_populated_state())
    store.write("slot", payload)
    assert (tmp_path / "saves" / "slot.json").exists()
    assert json.loads(store.read("slot"))["clickCount"] == 17


def test_json_file_store_rejects_invalid_utf8(tmp_path):
    store = JsonFileStore(tmp_path)
    store.path_for("slot").write_bytes(b"\xff\xfe{}")
    with pytest.raises(SaveLoadFailure):
        store.read("slot")


def test_large_but_finite_counts_load():
    state = decode_save({"producerCounts": {"toilet": 10_000}}, define_game())
    assert state.producer_count("toilet") == 10_000


def test_deeply_nested_payload_raises():
    with pytest.raises(SaveLoadFailure):
        loads_save("[" * 200_000, define_game())
