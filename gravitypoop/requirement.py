from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from gravitypoop._types import compare

if TYPE_CHECKING:
    from gravitypoop.state import PlayerSnapshot


class Requirement(ABC):
    """Base class for all requirements: boolean conditions on a player snapshot."""

    @abstractmethod
    def evaluate(self, snapshot: PlayerSnapshot) -> bool: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _ResourceRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return compare(snapshot.resource_count, self.op, self.threshold)


class _TotalProducedRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return compare(snapshot.total_resource_produced, self.op, self.threshold)


class _ClickRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return compare(snapshot.click_count, self.op, self.threshold)


class _PrestigeRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return compare(snapshot.prestige_currency, self.op, self.threshold)


class _CountRequirement(Requirement):
    def __init__(self, producer_id: str, op: str, threshold: int) -> None:
        self.producer_id = producer_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return compare(snapshot.producer_count(self.producer_id), self.op, self.threshold)


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return all(r.evaluate(snapshot) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return any(r.evaluate(snapshot) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[PlayerSnapshot], bool]) -> None:
        self.fn = fn

    def evaluate(self, snapshot: PlayerSnapshot) -> bool:
        return bool(self.fn(snapshot))


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def resource(op: str, threshold: float) -> Requirement:
        return _ResourceRequirement(op, threshold)

    @staticmethod
    def total_produced(op: str, threshold: float) -> Requirement:
        return _TotalProducedRequirement(op, threshold)

    @staticmethod
    def clicks(op: str, threshold: int) -> Requirement:
        return _ClickRequirement(op, threshold)

    @staticmethod
    def prestige(op: str, threshold: int) -> Requirement:
        return _PrestigeRequirement(op, threshold)

    @staticmethod
    def count(producer_id: str, op: str, threshold: int) -> Requirement:
        return _CountRequirement(producer_id, op, threshold)

    @staticmethod
    def owns(producer_id: str) -> Requirement:
        return _CountRequirement(producer_id, ">=", 1)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[PlayerSnapshot], bool]) -> Requirement:
        return _CustomRequirement(fn)
