from __future__ import annotations

from dataclasses import dataclass

from gravitypoop.requirement import Requirement


@dataclass(frozen=True)
class AchievementDef:
    """A one-time unlock that fires the first time its trigger is met."""

    id: str
    title: str = ""
    description: str = ""
    trigger: Requirement | None = None
