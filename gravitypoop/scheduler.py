"""Single-threaded simulated-time scheduler.

Tasks are ordered by due time, then by the order they were queued. Nothing
runs until ``advance`` is called, so the whole engine can be driven
deterministically from tests, the CLI or a real-time loop.
"""
from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

# Tolerance for float time comparisons (periodic due times are n * interval).
_EPSILON = 1e-9


@dataclass(order=True)
class ScheduledTask:
    """A queued callback. Periodic when ``interval`` is set."""

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    name: str = field(default="", compare=False)
    interval: float | None = field(default=None, compare=False)
    anchor: float = field(default=0.0, compare=False)
    runs: int = field(default=0, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Priority queue of one-shot and periodic tasks on a simulated clock."""

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = start_time
        self._queue: list[ScheduledTask] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledTask:
        """Run *callback* once, *delay* seconds from now."""
        if delay < 0:
            raise ValueError("delay must be non-negative")
        task = ScheduledTask(
            due=self._now + delay,
            seq=next(self._seq),
            callback=callback,
            name=name,
        )
        heapq.heappush(self._queue, task)
        return task

    def call_every(
        self, interval: float, callback: Callable[[], None], name: str = ""
    ) -> ScheduledTask:
        """Run *callback* every *interval* seconds, first at now + interval."""
        if interval <= 0:
            raise ValueError("interval must be positive")
        task = ScheduledTask(
            due=self._now + interval,
            seq=next(self._seq),
            callback=callback,
            name=name,
            interval=interval,
            anchor=self._now,
        )
        heapq.heappush(self._queue, task)
        return task

    def pending(self) -> list[ScheduledTask]:
        """Live tasks in firing order."""
        return sorted(t for t in self._queue if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every task that falls due.

        Returns the number of callbacks executed.
        """
        if seconds < 0:
            raise ValueError("cannot advance by a negative duration")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0].due <= target + _EPSILON:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = max(self._now, task.due)
            if task.periodic:
                task.runs += 1
                task.due = task.anchor + (task.runs + 1) * task.interval
                task.seq = next(self._seq)
                heapq.heappush(self._queue, task)
            task.callback()
            fired += 1
        self._now = max(self._now, target)
        if fired:
            logger.trace("Scheduler advanced to {:.3f}s ({} tasks)", self._now, fired)
        return fired
