"""
planning/strategies.py

Concrete distribution strategies: flat ("even") and ramp-up ("weighted").
"""

from __future__ import annotations

import math
from typing import Sequence

from planning.base import BaseDistributionStrategy, round_half_up


class UnknownStrategyError(ValueError):
    """
    Raised when a caller names a strategy that does not exist.
    """


class EvenDistribution(BaseDistributionStrategy):
    """
    Equal shares; the integer remainder goes one unit at a time to the earliest months.
    """

    name = "even"

    def weights(self, count: int) -> list[float]:
        return [1.0] * count

    def distribute(self, total: float, months: Sequence[str]) -> dict[str, float]:
        base_value = math.floor(total / len(months))
        remainder = total - base_value * len(months)
        return {
            month: base_value + 1 if index < remainder else base_value
            for index, month in enumerate(months)
        }


class WeightedDistribution(BaseDistributionStrategy):
    """
    Slow start for construction-style projects.

    Weights ramp linearly from 0.5 to 1.0 over the first half of the
    sequence and hold at 1.0 afterwards. Rounded shares that miss the total
    are corrected on the midpoint month.
    """

    name = "weighted"

    def weights(self, count: int) -> list[float]:
        midpoint = count // 2
        return [
            0.5 + (index / midpoint) * 0.5 if index < midpoint else 1.0
            for index in range(count)
        ]

    def distribute(self, total: float, months: Sequence[str]) -> dict[str, float]:
        weights = self.weights(len(months))
        total_weight = sum(weights)

        breakdown = {
            month: round_half_up(total * weight / total_weight)
            for month, weight in zip(months, weights)
        }

        difference = total - sum(breakdown.values())
        if difference != 0:
            breakdown[months[len(months) // 2]] += difference
        return breakdown


_STRATEGIES: dict[str, type[BaseDistributionStrategy]] = {
    EvenDistribution.name: EvenDistribution,
    WeightedDistribution.name: WeightedDistribution,
}


def available_strategies() -> tuple[str, ...]:
    return tuple(_STRATEGIES)


def get_strategy(name: str) -> BaseDistributionStrategy:
    """
    Return a fresh strategy instance for *name* (case-insensitive).
    """

    strategy_cls = _STRATEGIES.get(name.strip().lower())
    if strategy_cls is None:
        allowed = ", ".join(sorted(_STRATEGIES))
        raise UnknownStrategyError(f"Unknown distribution strategy {name!r}. Allowed values: {allowed}.")
    return strategy_cls()
