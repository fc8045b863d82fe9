from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gravitypoop.definition import GameConfig
    from gravitypoop.producer import ProducerDef
    from gravitypoop.state import PlayerState


class ProductionPipeline:
    """Computes production rates, multipliers and prices."""

    def __init__(self, config: GameConfig) -> None:
        self.config = config

    def compute_rate(
        self, producers: list[ProducerDef], state: PlayerState
    ) -> float:
        """Base rate: sum of owned_count * base_production_rate."""
        rate = 0.0
        for pdef in producers:
            count = state.producer_count(pdef.id)
            if count > 0:
                rate += count * pdef.base_production_rate
        return rate

    def compute_multiplier(self, global_multiplier: float, prestige_currency: int) -> float:
        """global_multiplier * (1 + essence * essence_bonus_rate)."""
        essence_bonus = 1.0 + prestige_currency * self.config.essence_bonus_rate
        return global_multiplier * essence_bonus

    def compute_click_value(self, multiplier: float) -> float:
        return self.config.click_value * multiplier

    def compute_cost(self, pdef: ProducerDef, owned_count: int) -> float:
        return pdef.cost_scaling.compute(pdef.base_cost, owned_count)
