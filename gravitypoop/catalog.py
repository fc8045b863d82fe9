"""Default Gravity Poop catalog: six producers and four achievements."""
from __future__ import annotations

from gravitypoop.achievement import AchievementDef
from gravitypoop.cost_scaling import CostScaling
from gravitypoop.definition import GameConfig, GameDefinition
from gravitypoop.producer import ProducerDef
from gravitypoop.requirement import Req

PRODUCERS: list[ProducerDef] = [
    ProducerDef(
        id="toilet",
        display_name="Toilet",
        base_cost=10,
        base_production_rate=0.1,
        cost_scaling=CostScaling.exponential(1.15),
        icon="toilet_icon.png",
    ),
    ProducerDef(
        id="cow",
        display_name="Cow",
        base_cost=100,
        base_production_rate=1,
        cost_scaling=CostScaling.exponential(1.15),
        icon="cow_icon.png",
    ),
    ProducerDef(
        id="space_station",
        display_name="Space Station",
        base_cost=1000,
        base_production_rate=10,
        cost_scaling=CostScaling.exponential(1.15),
        icon="space_station_icon.png",
    ),
    ProducerDef(
        id="portal",
        display_name="Dimensional Portal",
        base_cost=10000,
        base_production_rate=100,
        cost_scaling=CostScaling.exponential(1.15),
        icon="portal_icon.png",
    ),
    ProducerDef(
        id="solar_generator",
        display_name="Solar Poop Generator",
        base_cost=100000,
        base_production_rate=1000,
        cost_scaling=CostScaling.exponential(1.15),
        icon="solar_generator_icon.png",
    ),
    ProducerDef(
        id="cosmic_temple",
        display_name="Cosmic Poop Temple",
        base_cost=1000000,
        base_production_rate=10000,
        cost_scaling=CostScaling.exponential(1.15),
        icon="cosmic_temple_icon.png",
    ),
]

ACHIEVEMENTS: list[AchievementDef] = [
    AchievementDef(
        "ACH01",
        title="First Click!",
        description="Click the poop for the first time.",
        trigger=Req.clicks(">=", 1),
    ),
    AchievementDef(
        "ACH02",
        title="Toilet Master",
        description="Own 50 Toilets.",
        trigger=Req.count("toilet", ">=", 50),
    ),
    AchievementDef(
        "ACH03",
        title="Tycoon",
        description="Generate 1,000,000 total poop.",
        trigger=Req.total_produced(">=", 1_000_000),
    ),
    AchievementDef(
        "ACH04",
        title="Time Traveler",
        description="Perform a Prestige reset.",
        trigger=Req.prestige(">=", 1),
    ),
]


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Gravity Poop"),
        producers=list(PRODUCERS),
        achievements=list(ACHIEVEMENTS),
    )
