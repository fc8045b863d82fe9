from __future__ import annotations

import random
from dataclasses import dataclass

from loguru import logger

from gravitypoop._types import is_valid_amount
from gravitypoop.bonus import BonusEvent, BonusEventEngine
from gravitypoop.collaborators import AutoConfirmer, Confirmer, LogNotifier, Notifier
from gravitypoop.definition import GameDefinition
from gravitypoop.errors import InsufficientFunds, InvalidAmount, SaveLoadFailure
from gravitypoop.persistence import MemoryStore, SaveStore, dumps_save, loads_save
from gravitypoop.pipeline import ProductionPipeline
from gravitypoop.prestige import (
    PrestigeResult,
    PrestigeStatus,
    progress_percent,
    status_for,
)
from gravitypoop.producer import ProducerStatus
from gravitypoop.scheduler import Scheduler
from gravitypoop.state import PlayerSnapshot, PlayerState


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase attempt."""

    success: bool
    producer_id: str
    cost: float = 0.0
    new_count: int = 0
    reason: str = ""


class GameRuntime:
    """Authoritative game logic processor. One instance per game session."""

    def __init__(
        self,
        definition: GameDefinition,
        store: SaveStore | None = None,
        confirmer: Confirmer | None = None,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.config = definition.config
        self.store = store if store is not None else MemoryStore()
        self.confirmer = confirmer or AutoConfirmer(False)
        self.notifier = notifier or LogNotifier()
        self.scheduler = scheduler or Scheduler()
        self.pipeline = ProductionPipeline(self.config)
        self.bonus = BonusEventEngine(self.config, self.scheduler, rng)
        self.state = PlayerState(definition)
        self._started = False

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> None:
        """Register the periodic actions on the scheduler. Idempotent."""
        if self._started:
            return
        cfg = self.config
        self.scheduler.call_every(cfg.income_interval, self.passive_tick, name="income")
        self.scheduler.call_every(cfg.autosave_interval, self.save, name="autosave")
        self.scheduler.call_every(
            cfg.bonus_check_interval, self.check_bonus_spawn, name="bonus-check"
        )
        self.scheduler.call_every(
            cfg.achievement_check_interval,
            self.check_achievements,
            name="achievement-check",
        )
        self._started = True
        logger.debug("Runtime started for {!r}", cfg.name)

    def advance(self, seconds: float) -> int:
        """Run the scheduler forward by *seconds* of game time."""
        return self.scheduler.advance(seconds)

    # ── Persistence ──────────────────────────────────────────────────

    def save(self) -> bool:
        """Write the durable state to the store. Never raises on I/O errors."""
        try:
            self.store.write(self.config.save_key, dumps_save(self.state))
        except OSError as exc:
            logger.warning("Save failed for key {!r}: {}", self.config.save_key, exc)
            return False
        logger.debug("Saved game to {!r}", self.config.save_key)
        return True

    def load(self) -> bool:
        """Replace the state from the store.

        Returns True when a save was restored. Missing saves keep the fresh
        state; corrupt saves are logged and reset to a fresh state.
        """
        key = self.config.save_key
        try:
            payload = self.store.read(key)
        except (OSError, SaveLoadFailure) as exc:
            logger.warning("Save {!r} is unavailable: {}", key, exc)
            self._reset_to_fresh()
            return False
        if payload is None:
            logger.debug("No save found under {!r}", key)
            return False

        try:
            state = loads_save(payload, self.definition)
        except SaveLoadFailure as exc:
            logger.warning("Save {!r} is corrupt, starting fresh: {}", key, exc)
            self._reset_to_fresh()
            return False

        self.bonus.cancel_boosts()
        self.state = state
        self.recompute_production_rate()
        self._check_prestige_condition()
        logger.info(
            "Loaded save {!r}: {:.0f} poop, {} essence",
            key,
            state.resource_count,
            state.prestige_currency,
        )
        return True

    # ── Model operations ─────────────────────────────────────────────

    def add_resource(self, amount: float) -> None:
        """Credit *amount* to the balance and the lifetime total."""
        if not is_valid_amount(amount):
            logger.warning("Rejected resource delta {!r}", amount)
            raise InvalidAmount(amount)
        self.state.resource_count += amount
        self.state.total_resource_produced += amount
        self._check_prestige_condition()

    def effective_multiplier(self) -> float:
        return self.pipeline.compute_multiplier(
            self.state.global_multiplier, self.state.prestige_currency
        )

    def recompute_production_rate(self) -> float:
        self.state.pps = self.pipeline.compute_rate(self.definition.producers, self.state)
        return self.state.pps

    def effective_production_rate(self) -> float:
        return self.state.pps * self.effective_multiplier()

    # ── Player actions ───────────────────────────────────────────────

    def on_click(self) -> float:
        """Process a manual click. Returns the amount added."""
        amount = self.pipeline.compute_click_value(self.effective_multiplier())
        self.state.click_count += 1
        self.add_resource(amount)
        return amount

    def purchase(self, producer_id: str) -> PurchaseResult:
        """Buy one producer at its current price."""
        pdef = self.definition.get_producer(producer_id)
        if pdef is None:
            return PurchaseResult(False, producer_id, reason="Unknown producer")

        ps = self.state.producers[producer_id]
        cost = self.pipeline.compute_cost(pdef, ps.owned_count)
        try:
            self._debit(producer_id, cost)
        except InsufficientFunds as exc:
            logger.debug("{}", exc)
            return PurchaseResult(
                False,
                producer_id,
                cost=cost,
                new_count=ps.owned_count,
                reason="Insufficient funds",
            )

        ps.owned_count += 1
        self.recompute_production_rate()
        logger.info(
            "Bought {} #{} for {:g} (pps {:g})",
            pdef.display_name,
            ps.owned_count,
            cost,
            self.state.pps,
        )
        self.save()
        return PurchaseResult(True, producer_id, cost=cost, new_count=ps.owned_count)

    def request_prestige(self) -> PrestigeResult:
        """Prestige after the confirmer agrees. Locked runs are never asked."""
        if self.state.prestige_status is not PrestigeStatus.AVAILABLE:
            return PrestigeResult(
                success=False,
                prestige_currency=self.state.prestige_currency,
                reason="Prestige locked",
            )
        question = (
            "Are you sure you want to PRESTIGE? You will lose all progress but "
            "gain 1 Gold Essence "
            f"(+{self.config.essence_bonus_rate:.0%} permanent bonus)."
        )
        if not self.confirmer.confirm(question):
            return PrestigeResult(
                success=False,
                prestige_currency=self.state.prestige_currency,
                reason="Declined",
            )
        return self.prestige()

    def prestige(self) -> PrestigeResult:
        """Reset the run and grant one prestige currency."""
        state = self.state
        if state.prestige_status is not PrestigeStatus.AVAILABLE:
            return PrestigeResult(
                success=False,
                prestige_currency=state.prestige_currency,
                reason="Prestige locked",
            )

        state.prestige_status = PrestigeStatus.RESETTING
        cancelled = self.bonus.cancel_boosts()

        state.prestige_currency += 1
        state.resource_count = 0.0
        state.total_resource_produced = 0.0
        state.click_count = 0
        state.pps = 0.0
        state.global_multiplier = 1.0
        for ps in state.producers.values():
            ps.owned_count = 0

        self._check_prestige_condition()
        logger.info(
            "Prestige #{} complete ({} bonus boosts cancelled)",
            state.prestige_currency,
            cancelled,
        )
        self.save()
        self.notifier.notify(
            "Prestige successful!",
            f"You now have {state.prestige_currency} Gold Essence.",
        )
        return PrestigeResult(success=True, prestige_currency=state.prestige_currency)

    def collect_bonus_event(self, handle: int) -> bool:
        """Collect a visible golden poop. False for unknown or expired handles."""
        event = self.bonus.collect(handle, self.state)
        if event is None:
            return False
        self.notifier.notify(
            "Golden poop!",
            f"PpS x{self.config.bonus_multiplier:g} for "
            f"{self.config.bonus_duration:g} seconds!",
        )
        return True

    # ── Scheduled actions ────────────────────────────────────────────

    def passive_tick(self) -> None:
        if self.state.pps > 0:
            self.add_resource(self.effective_production_rate() * self.config.income_interval)

    def check_bonus_spawn(self) -> BonusEvent | None:
        return self.bonus.roll()

    def check_achievements(self) -> list[str]:
        """Unlock every achievement whose trigger now holds. Returns new ids."""
        snapshot = self.state.snapshot()
        unlocked: list[str] = []
        for adef in self.definition.achievements:
            if snapshot.has_achievement(adef.id):
                continue
            if adef.trigger is None or not adef.trigger.evaluate(snapshot):
                continue
            self.state.unlocked_achievements.append(adef.id)
            unlocked.append(adef.id)
            logger.info("Achievement unlocked: {} ({})", adef.title, adef.id)
            self.notifier.notify("Achievement Unlocked!", adef.title)
            self.save()
        return unlocked

    # ── Queries ──────────────────────────────────────────────────────

    def snapshot(self) -> PlayerSnapshot:
        return self.state.snapshot()

    @property
    def prestige_status(self) -> PrestigeStatus:
        return self.state.prestige_status

    def prestige_progress(self) -> int:
        return progress_percent(
            self.state.total_resource_produced, self.config.prestige_threshold
        )

    def cost(self, producer_id: str) -> float | None:
        pdef = self.definition.get_producer(producer_id)
        if pdef is None:
            return None
        return self.pipeline.compute_cost(pdef, self.state.producer_count(producer_id))

    def get_producers(self) -> list[ProducerStatus]:
        """Every producer in catalog order with its current price."""
        result: list[ProducerStatus] = []
        for pdef in self.definition.producers:
            count = self.state.producer_count(pdef.id)
            cost = self.pipeline.compute_cost(pdef, count)
            result.append(
                ProducerStatus(
                    id=pdef.id,
                    display_name=pdef.display_name,
                    owned_count=count,
                    current_cost=cost,
                    base_production_rate=pdef.base_production_rate,
                    affordable=self.state.resource_count >= cost,
                    icon=pdef.icon,
                )
            )
        return result

    def compute_time_to_afford(self, producer_id: str) -> float | None:
        """Seconds until affordable at the current rate. None if never."""
        cost = self.cost(producer_id)
        if cost is None:
            return None
        needed = cost - self.state.resource_count
        if needed <= 0:
            return 0.0
        rate = self.effective_production_rate()
        if rate <= 0:
            return None
        return needed / rate

    def visible_bonus_events(self) -> list[BonusEvent]:
        return self.bonus.visible_events()

    def active_boosts(self) -> list[BonusEvent]:
        return self.bonus.active_boosts()

    # ── Private helpers ──────────────────────────────────────────────

    def _debit(self, producer_id: str, cost: float) -> None:
        if self.state.resource_count < cost:
            raise InsufficientFunds(producer_id, cost, self.state.resource_count)
        self.state.resource_count -= cost

    def _check_prestige_condition(self) -> None:
        previous = self.state.prestige_status
        current = status_for(
            self.state.total_resource_produced, self.config.prestige_threshold
        )
        self.state.prestige_status = current
        if previous is PrestigeStatus.LOCKED and current is PrestigeStatus.AVAILABLE:
            logger.info(
                "Prestige available at {:.0f} total poop",
                self.state.total_resource_produced,
            )

    def _reset_to_fresh(self) -> None:
        self.bonus.cancel_boosts()
        self.state = PlayerState(self.definition)
        self.recompute_production_rate()
        self._check_prestige_condition()
