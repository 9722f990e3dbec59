from __future__ import annotations

import numpy as np
import pandas as pd

from ..grid.mapper import DateLike, coerce_date


def simulate_returns(
    start: DateLike,
    end: DateLike,
    mean: float = 0.0,
    sd: float = 0.02,
    seed: int | None = 123,
) -> pd.Series:
    """Draw one normally distributed return per calendar day.

    Args:
        start: First day (inclusive).
        end: Last day (inclusive).
        mean: Mean daily return.
        sd: Standard deviation of daily returns.
        seed: Seed for the random generator; None draws fresh entropy.

    Returns:
        Series of returns indexed by a daily DatetimeIndex.
    """
    index = pd.date_range(coerce_date(start, "start"), coerce_date(end, "end"), freq="D")
    rng = np.random.default_rng(seed)
    return pd.Series(rng.normal(loc=mean, scale=sd, size=len(index)), index=index, name="Returns")


def add_month_effect(returns: pd.Series, month: int, delta: float) -> pd.Series:
    """Return a copy with ``delta`` added to every day in calendar month ``month`` (1..12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    adjusted = returns.copy()
    mask = pd.DatetimeIndex(adjusted.index).month == month
    adjusted.loc[mask] += delta
    return adjusted


def add_weekday_effect(returns: pd.Series, weekday: int, delta: float) -> pd.Series:
    """Return a copy with ``delta`` added to every day on ISO weekday ``weekday`` (Mon=1..Sun=7).

    Pass a negative ``delta`` to subtract.
    """
    if not 1 <= weekday <= 7:
        raise ValueError(f"weekday must be in 1..7, got {weekday}")
    adjusted = returns.copy()
    # pandas counts Monday as 0
    mask = pd.DatetimeIndex(adjusted.index).dayofweek == weekday - 1
    adjusted.loc[mask] += delta
    return adjusted
