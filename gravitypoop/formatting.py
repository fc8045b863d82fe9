from __future__ import annotations

import math
from typing import TYPE_CHECKING

from gravitypoop.prestige import PrestigeStatus

if TYPE_CHECKING:
    from gravitypoop.runtime import GameRuntime


def format_number(value: float) -> str:
    """Whole-number display with thousands separators. Display only."""
    if not math.isfinite(value):
        return "inf"
    return f"{math.floor(value):,}"


def format_rate(value: float) -> str:
    return f"{value:,.1f}"


def prestige_label(runtime: GameRuntime) -> str:
    if runtime.prestige_status is PrestigeStatus.AVAILABLE:
        return "Prestige Available!"
    return f"Prestige: {runtime.prestige_progress()}%"


def format_status(runtime: GameRuntime) -> str:
    """Render the runtime as a plain-text status panel."""
    snap = runtime.snapshot()
    lines: list[str] = []

    lines.append("=" * 20 + f" {runtime.config.name} " + "=" * 20)
    lines.append(f"Poop: {format_number(snap.resource_count)}")
    lines.append(f"PpS: {format_rate(runtime.effective_production_rate())}")
    lines.append(f"Gold Essence: {snap.prestige_currency}")
    if snap.global_multiplier != 1.0:
        lines.append(f"Bonus multiplier: x{snap.global_multiplier:g}")
    lines.append(prestige_label(runtime))
    lines.append("")

    lines.append("STORE:")
    for p in runtime.get_producers():
        marker = "  " if p.affordable else "  x"
        lines.append(
            f"{marker} {p.display_name:.<28s} {p.owned_count:>4d}  "
            f"cost {format_number(p.current_cost):>14s}  +{p.base_production_rate:g} PpS"
        )
    lines.append("")

    if runtime.definition.achievements:
        lines.append("ACHIEVEMENTS:")
        for adef in runtime.definition.achievements:
            mark = "[x]" if snap.has_achievement(adef.id) else "[ ]"
            lines.append(f"  {mark} {adef.title} - {adef.description}")

    bonuses = runtime.visible_bonus_events()
    if bonuses:
        lines.append("")
        for event in bonuses:
            lines.append(
                f"  Golden poop #{event.handle} visible until {event.expires_at:.1f}s"
            )

    return "\n".join(lines)
