"""MCP server wrapping GameRuntime for interactive AI play."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from gravitypoop.collaborators import AutoConfirmer
from gravitypoop.definition import GameDefinition
from gravitypoop.persistence import MemoryStore, SaveStore
from gravitypoop.runtime import GameRuntime

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition and runtime."""

    definition: GameDefinition
    runtime: GameRuntime
    store: SaveStore | None = None
    seed: int | None = None


def _new_runtime(
    definition: GameDefinition,
    store: SaveStore | None,
    seed: int | None,
    restore: bool = True,
) -> GameRuntime:
    runtime = GameRuntime(
        definition,
        store=store if store is not None else MemoryStore(),
        confirmer=AutoConfirmer(True),
        rng=random.Random(seed),
    )
    if restore:
        runtime.load()
    else:
        runtime.save()
    runtime.start()
    return runtime


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.definition
    cfg = defn.config
    return {
        "name": cfg.name,
        "producers": [
            {
                "id": p.id,
                "display_name": p.display_name,
                "base_cost": p.base_cost,
                "base_production_rate": p.base_production_rate,
            }
            for p in defn.producers
        ],
        "achievements": [
            {"id": a.id, "title": a.title, "description": a.description}
            for a in defn.achievements
        ],
        "prestige_threshold": cfg.prestige_threshold,
        "essence_bonus_rate": cfg.essence_bonus_rate,
        "bonus_multiplier": cfg.bonus_multiplier,
        "bonus_duration": cfg.bonus_duration,
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    runtime = holder.runtime
    snap = runtime.snapshot()
    return {
        "time": round(runtime.scheduler.now, 2),
        "resource_count": round(snap.resource_count, 2),
        "total_resource_produced": round(snap.total_resource_produced, 2),
        "click_count": snap.click_count,
        "prestige_currency": snap.prestige_currency,
        "pps": round(snap.pps, 4),
        "effective_pps": round(runtime.effective_production_rate(), 4),
        "multiplier": round(runtime.effective_multiplier(), 4),
        "producers": dict(snap.producer_counts),
        "unlocked_achievements": list(snap.unlocked_achievements),
        "prestige_status": snap.prestige_status.value,
        "prestige_progress": runtime.prestige_progress(),
        "bonus_events": [
            {"handle": e.handle, "expires_at": round(e.expires_at, 2)}
            for e in runtime.visible_bonus_events()
        ],
        "active_boosts": [
            {"handle": e.handle, "ends_at": round(e.bonus_ends_at or 0.0, 2)}
            for e in runtime.active_boosts()
        ],
    }


def _tool_get_producers(holder: _GameHolder) -> dict[str, Any]:
    result = []
    for p in holder.runtime.get_producers():
        time_to_afford = holder.runtime.compute_time_to_afford(p.id)
        result.append({
            "id": p.id,
            "display_name": p.display_name,
            "owned_count": p.owned_count,
            "current_cost": p.current_cost,
            "base_production_rate": p.base_production_rate,
            "affordable": p.affordable,
            "time_to_afford": (
                round(time_to_afford, 2) if time_to_afford is not None else None
            ),
        })
    return {"producers": result}


def _tool_purchase(holder: _GameHolder, producer_id: str) -> dict[str, Any]:
    if holder.definition.get_producer(producer_id) is None:
        return {"error": f"Unknown producer: {producer_id!r}"}

    result = holder.runtime.purchase(producer_id)
    if result.success:
        return {
            "success": True,
            "producer_id": producer_id,
            "cost": result.cost,
            "new_count": result.new_count,
            "next_cost": holder.runtime.cost(producer_id),
        }
    return {"success": False, "reason": result.reason, "cost": result.cost}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.runtime.on_click()
    return {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(holder.runtime.state.resource_count, 2),
    }


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if not math.isfinite(seconds) or seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    runtime = holder.runtime
    before = set(runtime.state.unlocked_achievements)
    runtime.advance(seconds)
    new_achievements = [
        a for a in runtime.state.unlocked_achievements if a not in before
    ]

    result: dict[str, Any] = {
        "waited": seconds,
        "time": round(runtime.scheduler.now, 2),
        "resource_count": round(runtime.state.resource_count, 2),
        "effective_pps": round(runtime.effective_production_rate(), 4),
    }
    bonus_events = [e.handle for e in runtime.visible_bonus_events()]
    if bonus_events:
        result["bonus_events"] = bonus_events
    if new_achievements:
        result["new_achievements"] = new_achievements
    return result


def _tool_collect_bonus(holder: _GameHolder, handle: int) -> dict[str, Any]:
    if holder.runtime.collect_bonus_event(handle):
        return {
            "success": True,
            "multiplier": round(holder.runtime.effective_multiplier(), 4),
        }
    return {"success": False, "reason": "No visible golden poop with that handle"}


def _tool_prestige(holder: _GameHolder, confirm: bool = False) -> dict[str, Any]:
    if not confirm:
        return {
            "success": False,
            "reason": "Prestige resets all progress; call again with confirm=true",
        }
    result = holder.runtime.request_prestige()
    if result.success:
        return {"success": True, "prestige_currency": result.prestige_currency}
    return {"success": False, "reason": result.reason}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    # Overwrites the existing save in the same store
    holder.runtime = _new_runtime(
        holder.definition, holder.runtime.store, holder.seed, restore=False
    )
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(
    definition: GameDefinition,
    store: SaveStore | None = None,
    seed: int | None = None,
) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime for the given definition."""
    if store is None:
        store = MemoryStore()
    holder = _GameHolder(
        definition=definition,
        runtime=_new_runtime(definition, store, seed),
        store=store,
        seed=seed,
    )

    mcp = FastMCP(
        name=f"Gravity Poop: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: producers, achievements, prestige and bonus rules."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: balances, producer counts, achievements, bonus events."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_producers() -> dict[str, Any]:
        """Get every producer with its current cost and time-to-afford."""
        return _tool_get_producers(holder)

    @mcp.tool()
    def purchase(producer_id: str) -> dict[str, Any]:
        """Buy one producer. Returns success/failure with reason."""
        return _tool_purchase(holder, producer_id)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click the poop N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400)."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def collect_bonus(handle: int) -> dict[str, Any]:
        """Collect a visible golden poop by handle for a temporary x2 boost."""
        return _tool_collect_bonus(holder, handle)

    @mcp.tool()
    def prestige(confirm: bool = False) -> dict[str, Any]:
        """Reset all progress for one Gold Essence. Requires confirm=true."""
        return _tool_prestige(holder, confirm)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
