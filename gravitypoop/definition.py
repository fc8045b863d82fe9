from __future__ import annotations

from dataclasses import dataclass, field

from gravitypoop.achievement import AchievementDef
from gravitypoop.producer import ProducerDef


@dataclass
class GameConfig:
    """Top-level game configuration. Times are in seconds."""

    name: str = "Gravity Poop"
    income_interval: float = 0.1
    autosave_interval: float = 10.0
    bonus_check_interval: float = 1.0
    achievement_check_interval: float = 1.0
    bonus_spawn_chance: float = 1 / 300
    bonus_display_duration: float = 10.0
    bonus_duration: float = 60.0
    bonus_multiplier: float = 2.0
    prestige_threshold: float = 1_000_000
    essence_bonus_rate: float = 0.1
    click_value: float = 1.0
    save_key: str = "gravityPoopSave"


@dataclass
class GameDefinition:
    """Complete static definition of a game: config plus catalogs."""

    config: GameConfig = field(default_factory=GameConfig)
    producers: list[ProducerDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _producers_by_id: dict[str, ProducerDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._producers_by_id = {p.id: p for p in self.producers}
        self._achievements_by_id = {a.id: a for a in self.achievements}

    def get_producer(self, id: str) -> ProducerDef | None:
        return self._producers_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []

        seen_p: set[str] = set()
        for p in self.producers:
            if p.id in seen_p:
                errors.append(f"Duplicate producer ID: {p.id!r}")
            seen_p.add(p.id)
            if p.base_cost <= 0:
                errors.append(f"Producer {p.id!r} must have a positive base_cost")
            if p.base_production_rate < 0:
                errors.append(
                    f"Producer {p.id!r} has negative base_production_rate"
                )

        seen_a: set[str] = set()
        for a in self.achievements:
            if a.id in seen_a:
                errors.append(f"Duplicate achievement ID: {a.id!r}")
            seen_a.add(a.id)
            if a.trigger is None:
                errors.append(f"Achievement {a.id!r} has no trigger")
            self._check_producer_refs(a.id, a.trigger, errors)

        cfg = self.config
        for name in (
            "income_interval",
            "autosave_interval",
            "bonus_check_interval",
            "achievement_check_interval",
            "bonus_display_duration",
            "bonus_duration",
            "prestige_threshold",
        ):
            if getattr(cfg, name) <= 0:
                errors.append(f"GameConfig.{name} must be positive")
        if not 0 <= cfg.bonus_spawn_chance <= 1:
            errors.append("GameConfig.bonus_spawn_chance must be within [0, 1]")
        if cfg.bonus_multiplier <= 0:
            errors.append("GameConfig.bonus_multiplier must be positive")
        if not cfg.save_key:
            errors.append("GameConfig.save_key must not be empty")

        return errors

    def _check_producer_refs(
        self, achievement_id: str, req: object, errors: list[str]
    ) -> None:
        producer_id = getattr(req, "producer_id", None)
        if producer_id is not None and producer_id not in self._producers_by_id:
            errors.append(
                f"Achievement {achievement_id!r} references unknown producer {producer_id!r}"
            )
        # Recurse into composite requirements
        for sub in getattr(req, "reqs", ()):
            self._check_producer_refs(achievement_id, sub, errors)
