"""
planning/base.py

Abstract base class for monthly distribution strategies.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.
    """

    return math.floor(value + 0.5)


class BaseDistributionStrategy(ABC):
    """
    Contract for shaping a scalar target across an ordered month sequence.

    :meth:`distribute` and :meth:`weights` must be pure functions of their
    arguments.
    """

    #: Identifier used by callers to select the strategy.
    name: str = ""

    @abstractmethod
    def weights(self, count: int) -> list[float]:
        """
        Relative share of each of *count* consecutive months.
        """

    @abstractmethod
    def distribute(self, total: float, months: Sequence[str]) -> dict[str, float]:
        """
        Split *total* across *months* so the values sum back to *total*.

        Parameters
        ----------
        total:
            Target amount for the whole period.
        months:
            ``YYYY-MM`` tokens in chronological order. Must not be empty.

        Returns
        -------
        dict
            Month token to allocated amount, in *months* order.
        """
