"""
planning/templates.py

Pre-populated monthly targets for project planning forms.
"""

from __future__ import annotations

from typing import Sequence

from planning.strategies import get_strategy

PERCENTAGE_CEILING = 100.0


def generate_monthly_template(
    total: float,
    months: Sequence[str],
    strategy: str = "even",
) -> dict[str, float]:
    """
    Distribute an absolute *total* across *months*; the values sum to *total*.
    """

    distribution = get_strategy(strategy)
    if not months:
        return {}
    return distribution.distribute(total, months)


def generate_cumulative_percentage_template(
    months: Sequence[str],
    strategy: str = "even",
) -> dict[str, float]:
    """
    Cumulative percent-complete targets rising to exactly 100 in the last month.

    Values are rounded to two decimals and never decrease.
    """

    distribution = get_strategy(strategy)
    if not months:
        return {}

    weights = distribution.weights(len(months))
    total_weight = sum(weights)

    template: dict[str, float] = {}
    running_weight = 0.0
    for month, weight in zip(months, weights):
        running_weight += weight
        share = round(PERCENTAGE_CEILING * running_weight / total_weight, 2)
        template[month] = min(PERCENTAGE_CEILING, share)

    template[months[-1]] = PERCENTAGE_CEILING
    return template
