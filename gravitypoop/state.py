from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from gravitypoop.prestige import PrestigeStatus
from gravitypoop.producer import ProducerState

if TYPE_CHECKING:
    from gravitypoop.definition import GameDefinition


class PlayerState:
    """Mutable runtime container holding all player state."""

    def __init__(self, definition: GameDefinition) -> None:
        self.resource_count: float = 0.0
        self.total_resource_produced: float = 0.0
        self.click_count: int = 0
        self.prestige_currency: int = 0
        self.pps: float = 0.0
        self.global_multiplier: float = 1.0
        self.unlocked_achievements: list[str] = []
        self.prestige_status: PrestigeStatus = PrestigeStatus.LOCKED
        self.producers: dict[str, ProducerState] = {
            pdef.id: ProducerState() for pdef in definition.producers
        }

    def producer_count(self, id: str) -> int:
        ps = self.producers.get(id)
        return ps.owned_count if ps else 0

    def has_achievement(self, id: str) -> bool:
        return id in self.unlocked_achievements

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            resource_count=self.resource_count,
            total_resource_produced=self.total_resource_produced,
            click_count=self.click_count,
            prestige_currency=self.prestige_currency,
            pps=self.pps,
            global_multiplier=self.global_multiplier,
            prestige_status=self.prestige_status,
            producer_counts=MappingProxyType(
                {pid: ps.owned_count for pid, ps in self.producers.items()}
            ),
            unlocked_achievements=tuple(self.unlocked_achievements),
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    """Immutable view of PlayerState, taken once per observer pass."""

    resource_count: float = 0.0
    total_resource_produced: float = 0.0
    click_count: int = 0
    prestige_currency: int = 0
    pps: float = 0.0
    global_multiplier: float = 1.0
    prestige_status: PrestigeStatus = PrestigeStatus.LOCKED
    producer_counts: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    unlocked_achievements: tuple[str, ...] = ()

    def producer_count(self, id: str) -> int:
        return self.producer_counts.get(id, 0)

    def has_achievement(self, id: str) -> bool:
        return id in self.unlocked_achievements
