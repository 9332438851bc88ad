"""
planning/months.py

Month token helpers. Tokens are ``YYYY-MM`` strings.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

import pandas as pd

DateLike = Union[str, date, datetime]


def generate_month_range(start: DateLike, end: DateLike) -> list[str]:
    """
    Every month from *start*'s month through *end*'s month, inclusive.

    Returns an empty list when *start* falls after *end*.
    """

    periods = pd.period_range(
        start=pd.Period(start, freq="M"),
        end=pd.Period(end, freq="M"),
        freq="M",
    )
    return [period.strftime("%Y-%m") for period in periods]


def format_month(month: str) -> str:
    """
    Format ``2025-01`` as ``Jan 2025``; malformed tokens yield ``""``.
    """

    if not month or not isinstance(month, str):
        return ""

    year, _, month_number = month.partition("-")
    try:
        parsed = datetime(int(year), int(month_number), 1)
    except ValueError:
        return ""
    return parsed.strftime("%b %Y")
