"""Golden poop: randomly spawned, collectible, time-limited multiplier boosts."""
from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from gravitypoop.definition import GameConfig
    from gravitypoop.scheduler import ScheduledTask, Scheduler
    from gravitypoop.state import PlayerState


class BonusStatus(Enum):
    VISIBLE = "visible"
    EXPIRED = "expired"
    COLLECTED = "collected"


@dataclass
class BonusEvent:
    """One spawned golden poop. Never persisted."""

    handle: int
    spawn_time: float
    expires_at: float
    status: BonusStatus = BonusStatus.VISIBLE
    collected_at: float | None = None
    bonus_ends_at: float | None = None

    @property
    def active(self) -> bool:
        return self.status is BonusStatus.VISIBLE


class BonusEventEngine:
    """Spawns bonus events and owns one deferred reversal per collection."""

    def __init__(
        self,
        config: GameConfig,
        scheduler: Scheduler,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self._handles = itertools.count(1)
        self._visible: dict[int, BonusEvent] = {}
        self._boosts: dict[int, tuple[BonusEvent, ScheduledTask]] = {}

    def roll(self) -> BonusEvent | None:
        """One spawn check. Spawns iff a uniform draw is below the spawn chance."""
        if self.rng.random() < self.config.bonus_spawn_chance:
            return self.spawn()
        return None

    def spawn(self) -> BonusEvent:
        now = self.scheduler.now
        event = BonusEvent(
            handle=next(self._handles),
            spawn_time=now,
            expires_at=now + self.config.bonus_display_duration,
        )
        self._visible[event.handle] = event
        self.scheduler.call_later(
            self.config.bonus_display_duration,
            lambda: self._expire(event.handle),
            name=f"bonus-expire-{event.handle}",
        )
        logger.info("Golden poop #{} spawned at {:.1f}s", event.handle, now)
        return event

    def collect(self, handle: int, state: PlayerState) -> BonusEvent | None:
        """Collect a visible event: multiply now, divide back after bonus_duration."""
        event = self._visible.pop(handle, None)
        if event is None:
            logger.debug("Golden poop #{} is not collectible", handle)
            return None

        factor = self.config.bonus_multiplier
        now = self.scheduler.now
        event.status = BonusStatus.COLLECTED
        event.collected_at = now
        event.bonus_ends_at = now + self.config.bonus_duration
        state.global_multiplier *= factor

        def _reverse() -> None:
            state.global_multiplier /= factor
            self._boosts.pop(handle, None)
            logger.info("Golden poop #{} boost ended", handle)

        task = self.scheduler.call_later(
            self.config.bonus_duration, _reverse, name=f"bonus-reverse-{handle}"
        )
        self._boosts[handle] = (event, task)
        logger.info(
            "Golden poop #{} collected: x{:g} for {:g}s",
            handle,
            factor,
            self.config.bonus_duration,
        )
        return event

    def cancel_boosts(self) -> int:
        """Drop every pending reversal without applying it. Returns the count."""
        count = len(self._boosts)
        for _event, task in self._boosts.values():
            task.cancel()
        self._boosts.clear()
        return count

    def visible_events(self) -> list[BonusEvent]:
        return list(self._visible.values())

    def active_boosts(self) -> list[BonusEvent]:
        return [event for event, _task in self._boosts.values()]

    def _expire(self, handle: int) -> None:
        event = self._visible.pop(handle, None)
        if event is not None:
            event.status = BonusStatus.EXPIRED
            logger.debug("Golden poop #{} expired uncollected", handle)
