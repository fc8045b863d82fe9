from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class PrestigeStatus(Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    RESETTING = "resetting"


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige attempt."""

    success: bool
    prestige_currency: int = 0
    reason: str = ""


def status_for(total_produced: float, threshold: float) -> PrestigeStatus:
    if total_produced >= threshold:
        return PrestigeStatus.AVAILABLE
    return PrestigeStatus.LOCKED


def progress_percent(total_produced: float, threshold: float) -> int:
    """Whole-number progress towards the prestige threshold, capped at 100."""
    return min(100, math.floor(total_produced / threshold * 100))
