from __future__ import annotations


class GameError(Exception):
    """Base class for recoverable engine errors."""


class InsufficientFunds(GameError):
    """Raised when a purchase costs more than the current balance."""

    def __init__(self, producer_id: str, cost: float, balance: float) -> None:
        super().__init__(
            f"Insufficient funds for {producer_id!r}: cost {cost:g}, have {balance:g}"
        )
        self.producer_id = producer_id
        self.cost = cost
        self.balance = balance


class InvalidAmount(GameError, ValueError):
    """Raised for negative or non-finite resource deltas."""

    def __init__(self, amount: float) -> None:
        super().__init__(f"Invalid resource amount: {amount!r}")
        self.amount = amount


class SaveLoadFailure(GameError):
    """Raised when a save record is unreadable or malformed."""
