"""The first Gravity Poop release: four producers and no achievements."""
from __future__ import annotations

from gravitypoop.cost_scaling import CostScaling
from gravitypoop.definition import GameConfig, GameDefinition
from gravitypoop.producer import ProducerDef


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(
            name="Gravity Poop Classic",
            save_key="gravityPoopClassicSave",
        ),
        producers=[
            ProducerDef(
                id="toilet",
                display_name="Toilet",
                base_cost=10,
                base_production_rate=0.1,
                cost_scaling=CostScaling.exponential(1.15),
            ),
            ProducerDef(
                id="cow",
                display_name="Cow",
                base_cost=100,
                base_production_rate=1,
                cost_scaling=CostScaling.exponential(1.15),
            ),
            ProducerDef(
                id="space_station",
                display_name="Space Station",
                base_cost=1000,
                base_production_rate=10,
                cost_scaling=CostScaling.exponential(1.15),
            ),
            ProducerDef(
                id="portal",
                display_name="Dimensional Portal",
                base_cost=10000,
                base_production_rate=100,
                cost_scaling=CostScaling.exponential(1.15),
            ),
        ],
    )
