from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Determines how a producer's price changes with owned count."""

    def __init__(self, fn: Callable[[float, int], float]) -> None:
        self._fn = fn

    def compute(self, base_cost: float, current_count: int) -> float:
        return self._fn(base_cost, current_count)

    @classmethod
    def fixed(cls) -> CostScaling:
        """Cost never changes."""
        return cls(lambda base, _count: base)

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = floor(base * growth_rate^count), or inf once that overflows."""
        gr = growth_rate  # capture

        def _compute(base: float, count: int) -> float:
            try:
                raw = base * gr ** count
            except OverflowError:
                return math.inf
            if not math.isfinite(raw):
                return math.inf
            return float(math.floor(raw))

        return cls(_compute)

    @classmethod
    def custom(cls, fn: Callable[[float, int], float]) -> CostScaling:
        """Arbitrary cost function."""
        return cls(fn)
