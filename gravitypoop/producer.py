from __future__ import annotations

from dataclasses import dataclass, field

from gravitypoop.cost_scaling import CostScaling


@dataclass
class ProducerDef:
    """Static definition of a purchasable producer."""

    id: str
    display_name: str = ""
    base_cost: float = 0.0
    base_production_rate: float = 0.0
    cost_scaling: CostScaling = field(default_factory=CostScaling.exponential)
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class ProducerState:
    """Mutable runtime state for a producer."""

    owned_count: int = 0


@dataclass(frozen=True)
class ProducerStatus:
    """Read-only snapshot of a producer for store rendering."""

    id: str
    display_name: str
    owned_count: int
    current_cost: float
    base_production_rate: float
    affordable: bool
    icon: str = ""
