"""
planning/progress.py

Checks and adjustments applied to monthly breakdowns once they exist.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from planning.base import round_half_up

logger = logging.getLogger(__name__)

PERCENTAGE_CEILING = 100.0
DEFAULT_FINAL_TOLERANCE = 0.01


@dataclass(frozen=True)
class BreakdownValidationResult:
    is_valid: bool
    difference: float
    total: float


@dataclass(frozen=True)
class CumulativeValidationResult:
    """
    Outcome of a cumulative-percentage check; ``message`` names the first failure.
    """

    is_valid: bool
    message: str | None = None


@dataclass(frozen=True)
class ProgressSlippage:
    slippage: float
    status: str
    severity: str
    message: str


def validate_monthly_breakdown(
    breakdown: Mapping[str, float],
    target: float,
) -> BreakdownValidationResult:
    """
    Compare the sum of *breakdown* with *target*.
    """

    total = sum(breakdown.values())
    difference = total - target
    return BreakdownValidationResult(is_valid=difference == 0, difference=difference, total=total)


def validate_cumulative_percentage(
    values: Mapping[str, float],
    months: Sequence[str],
    *,
    tolerance: float = DEFAULT_FINAL_TOLERANCE,
) -> CumulativeValidationResult:
    """
    Check that cumulative percentages never fall, never pass 100 and end at 100.

    Months missing from *values* count as 0.
    """

    if not months:
        return CumulativeValidationResult(is_valid=False, message="No months to validate.")

    previous: float | None = None
    for month in months:
        value = values.get(month, 0)
        if previous is not None and value < previous:
            return CumulativeValidationResult(
                is_valid=False,
                message=f"Cumulative percentage decreases in {month} ({value} < {previous}).",
            )
        if value > PERCENTAGE_CEILING:
            return CumulativeValidationResult(
                is_valid=False,
                message=f"Cumulative percentage exceeds 100 in {month} ({value}).",
            )
        previous = value

    final_month = months[-1]
    final_value = values.get(final_month, 0)
    if abs(final_value - PERCENTAGE_CEILING) > tolerance:
        return CumulativeValidationResult(
            is_valid=False,
            message=f"Final month {final_month} must reach 100 (got {final_value}).",
        )
    return CumulativeValidationResult(is_valid=True)


def get_cumulative_progress(
    breakdown: Mapping[str, float],
    months: Sequence[str],
) -> dict[str, float]:
    """
    Running totals of *breakdown* in *months* order.
    """

    cumulative: dict[str, float] = {}
    running_total = 0
    for month in months:
        running_total += breakdown.get(month, 0)
        cumulative[month] = running_total
    return cumulative


def adjust_monthly_breakdown(
    current: Mapping[str, float],
    new_total: float,
) -> dict[str, float]:
    """
    Rescale *current* proportionally so it sums to *new_total*.

    Rounding residue goes to the first month whose rounded value is positive.
    When no month is positive the residue is dropped and logged. A
    breakdown that sums to zero is returned unchanged.
    """

    current_total = sum(current.values())
    if current_total == 0:
        return dict(current)

    ratio = new_total / current_total
    adjusted = {month: round_half_up(value * ratio) for month, value in current.items()}

    difference = new_total - sum(adjusted.values())
    if difference != 0:
        first_month = next((month for month, value in adjusted.items() if value > 0), None)
        if first_month is not None:
            adjusted[first_month] += difference
        else:
            logger.warning(
                "Monthly breakdown residual dropped new_total=%s residual=%s months=%d",
                new_total,
                difference,
                len(adjusted),
            )
    return adjusted


def calculate_slippage(
    plan: Mapping[str, float],
    actual: Mapping[str, float],
    months: Sequence[str],
) -> dict[str, float]:
    """
    Planned minus actual per month; positive means behind schedule.
    """

    return {month: plan.get(month, 0) - actual.get(month, 0) for month in months}


def calculate_progress_slippage(planned_percentage: float, actual_percentage: float) -> ProgressSlippage:
    """
    Classify one planned-vs-actual gap.

    ``behind`` for any positive gap (``moderate`` above 10 points, ``severe``
    above 20), ``ahead`` when more than 5 points ahead, else ``on-track``.
    """

    slippage = planned_percentage - actual_percentage

    status = "on-track"
    severity = "minor"
    if slippage > 0:
        status = "behind"
        if slippage > 20:
            severity = "severe"
        elif slippage > 10:
            severity = "moderate"
    elif slippage < -5:
        status = "ahead"

    rounded = math.floor(slippage * 100 + 0.5) / 100
    if slippage > 0:
        message = f"{abs(rounded):g}% behind schedule"
    elif slippage < 0:
        message = f"{abs(rounded):g}% ahead of schedule"
    else:
        message = "On schedule"

    return ProgressSlippage(slippage=rounded, status=status, severity=severity, message=message)
