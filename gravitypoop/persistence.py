"""Save record encoding and storage backends.

Only the durable subset of PlayerState is written: balances, counters,
prestige currency, achievements and producer counts. The production rate is
derived and multipliers are transient, so neither is saved.
"""
from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gravitypoop.errors import SaveLoadFailure
from gravitypoop.state import PlayerState

if TYPE_CHECKING:
    from gravitypoop.definition import GameDefinition


# ── Stores ───────────────────────────────────────────────────────────


class SaveStore(ABC):
    """Key-value blob storage for save records."""

    @abstractmethod
    def read(self, key: str) -> str | None: ...

    @abstractmethod
    def write(self, key: str, payload: str) -> None: ...


class MemoryStore(SaveStore):
    """In-process store, mainly for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, payload: str) -> None:
        self.data[key] = payload


class JsonFileStore(SaveStore):
    """One ``<key>.json`` file per key inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SaveLoadFailure(f"{path} is not valid UTF-8: {exc}") from exc

    def write(self, key: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(path)


# ── Encoding ─────────────────────────────────────────────────────────


def encode_save(state: PlayerState) -> dict[str, Any]:
    """Build the save record for *state*."""
    return {
        "resourceCount": state.resource_count,
        "totalResourceProduced": state.total_resource_produced,
        "clickCount": state.click_count,
        "prestigeCurrency": state.prestige_currency,
        "unlockedAchievementIds": list(state.unlocked_achievements),
        "producerCounts": {
            pid: ps.owned_count for pid, ps in state.producers.items()
        },
    }


def dumps_save(state: PlayerState) -> str:
    return json.dumps(encode_save(state))


def loads_save(payload: str, definition: GameDefinition) -> PlayerState:
    """Parse a JSON save payload. Raises SaveLoadFailure on any corruption."""
    try:
        data = json.loads(payload)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SaveLoadFailure(f"Save payload is not valid JSON: {exc}") from exc
    return decode_save(data, definition)


def decode_save(data: Any, definition: GameDefinition) -> PlayerState:
    """Rebuild a PlayerState from a save record.

    Missing fields default to zero, unknown producers are ignored, and
    ``total_resource_produced`` is raised to at least ``resource_count``.
    Derived values (pps, prestige status) are left to the caller.
    """
    if not isinstance(data, dict):
        raise SaveLoadFailure(
            f"Save record must be an object, got {type(data).__name__}"
        )

    state = PlayerState(definition)
    state.resource_count = _number(data, "resourceCount")
    state.total_resource_produced = _number(data, "totalResourceProduced")
    state.click_count = _integer(data.get("clickCount"), "clickCount")
    state.prestige_currency = _integer(data.get("prestigeCurrency"), "prestigeCurrency")

    if state.total_resource_produced < state.resource_count:
        state.total_resource_produced = state.resource_count

    achievements = data.get("unlockedAchievementIds", [])
    if not isinstance(achievements, list) or not all(
        isinstance(a, str) for a in achievements
    ):
        raise SaveLoadFailure("unlockedAchievementIds must be a list of strings")
    for ach_id in achievements:
        if ach_id not in state.unlocked_achievements:
            state.unlocked_achievements.append(ach_id)

    counts = data.get("producerCounts", {})
    if not isinstance(counts, dict):
        raise SaveLoadFailure("producerCounts must be an object")
    rate = 0.0
    for pid, raw in counts.items():
        ps = state.producers.get(pid)
        if ps is None:
            continue
        ps.owned_count = _integer(raw, f"producerCounts.{pid}")
        rate += float(ps.owned_count) * definition.get_producer(pid).base_production_rate
    if not math.isfinite(rate):
        raise SaveLoadFailure("producerCounts are too large for a finite production rate")

    return state


def _number(data: dict[str, Any], key: str) -> float:
    raw = data.get(key)
    if raw is None:
        return 0.0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SaveLoadFailure(f"{key} must be a number, got {raw!r}")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise SaveLoadFailure(f"{key} is too large") from exc
    if not math.isfinite(value) or value < 0:
        raise SaveLoadFailure(f"{key} must be a finite non-negative number")
    return value


def _integer(raw: Any, key: str) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SaveLoadFailure(f"{key} must be an integer, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise SaveLoadFailure(f"{key} must be a whole number, got {raw!r}")
    value = int(raw)
    if value < 0:
        raise SaveLoadFailure(f"{key} must not be negative")
    try:
        float(value)
    except OverflowError as exc:
        raise SaveLoadFailure(f"{key} is too large") from exc
    return value
