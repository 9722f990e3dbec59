from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

import numpy as np
import pandas as pd

from .errors import InvalidInputError, InvalidRangeError, LengthMismatchError
from .labels import MONTH_LABELS, WEEKDAY_LABELS, Month, Weekday

logger = logging.getLogger(__name__)

DateLike = date | datetime | pd.Timestamp | np.datetime64 | str

FRAME_COLUMNS = [
    "date",
    "value",
    "year",
    "month_label",
    "weekday_label",
    "week_of_month",
    "month_year_label",
]


@dataclass(frozen=True)
class CalendarCell:
    """One day placed on the calendar grid.

    Attributes:
        date: Calendar date of the cell.
        value: The caller's value for that date, unchanged.
        year: Calendar year of ``date``.
        month_label: Three-letter month abbreviation (Jan..Dec).
        weekday_label: Three-letter weekday abbreviation (Mon..Sun).
        week_of_month: 1-based grid row within the month.
        month_year_label: Panel key, e.g. "Mar 2023".
    """

    date: date
    value: float
    year: int
    month_label: str
    weekday_label: str
    week_of_month: int
    month_year_label: str


def _coerce_values(values: Any) -> list[numbers.Real]:
    """Validate that values form a one-dimensional sequence of real numbers.

    Elements are returned as given (numpy scalars become Python numbers). NaN
    is kept as a missing day. Infinite values, numbers too large for a float,
    bools, strings and any other non-numeric element are rejected.
    """
    if values is None:
        raise InvalidInputError("Values must be a numeric sequence, got None")

    if isinstance(values, (pd.Series, np.ndarray)):
        if values.ndim != 1:
            raise InvalidInputError(f"Values must be one-dimensional, got {values.ndim} dimensions")
        items = values.tolist()
    elif isinstance(values, Sequence) and not isinstance(values, (str, bytes)):
        items = list(values)
    else:
        raise InvalidInputError(f"Values must be a numeric sequence, got {type(values).__name__}")

    checked = []
    for i, item in enumerate(items):
        if isinstance(item, (bool, np.bool_)) or not isinstance(item, numbers.Real):
            raise InvalidInputError(f"Values must be numeric; element {i} is {item!r}")
        if isinstance(item, np.generic):
            item = item.item()
        # float() only checks the value; the cell keeps the caller's number
        try:
            finite = not math.isinf(float(item))
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidInputError(f"Values must be finite floats; element {i} is out of range")
        checked.append(item)
    return checked


def coerce_date(value: DateLike, name: str = "date") -> date:
    """Convert a date-like value to ``datetime.date``.

    Accepts ``date``, ``datetime`` (including ``pandas.Timestamp``),
    ``numpy.datetime64`` and ISO ``YYYY-MM-DD`` strings.

    Raises:
        InvalidInputError: If the value cannot be read as a calendar date.
    """
    if isinstance(value, datetime):
        if pd.isna(value):
            raise InvalidInputError(f"{name} must be a calendar date, got NaT")
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise InvalidInputError(f"{name} must be a calendar date, got NaT")
        return pd.Timestamp(value).date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidInputError(f"{name} must be a YYYY-MM-DD date, got {value!r}") from exc
    raise InvalidInputError(f"{name} must be a calendar date, got {type(value).__name__}")


def week_of_month(day: date) -> int:
    """Return the 1-based grid row of ``day`` within its month.

    The month's first weekday is folded onto an ordinal with
    ``((isoweekday + 5) % 7) + 1`` and used to offset the day of month, so the
    1st of every month is always in row 1.
    """
    month_start = day.replace(day=1)
    first_weekday = (month_start.isoweekday() + 5) % 7 + 1
    days_into_month = (day - month_start).days
    return (days_into_month + first_weekday - 1) // 7 + 1


def _make_cell(day: date, value: float) -> CalendarCell:
    month_label = Month(day.month).label
    return CalendarCell(
        date=day,
        value=value,
        year=day.year,
        month_label=month_label,
        weekday_label=Weekday(day.isoweekday()).label,
        week_of_month=week_of_month(day),
        month_year_label=f"{month_label} {day.year}",
    )


class CalendarGridMapper:
    """Place daily values on a month-by-month calendar grid.

    The mapper holds no state; one instance can be shared freely.
    """

    def map(
        self,
        values: Sequence[float] | np.ndarray | pd.Series,
        start_date: DateLike,
        end_date: DateLike,
    ) -> list[CalendarCell]:
        """Annotate each day in ``[start_date, end_date]`` with its grid position.

        Args:
            values: One value per day, in date order.
            start_date: First day (inclusive).
            end_date: Last day (inclusive).

        Returns:
            One CalendarCell per day, in date order.

        Raises:
            InvalidInputError: If values are not a sequence of real numbers or a
                date cannot be read.
            InvalidRangeError: If end_date precedes start_date.
            LengthMismatchError: If the number of values differs from the number
                of days in the range.
        """
        parsed = _coerce_values(values)
        start = coerce_date(start_date, "start_date")
        end = coerce_date(end_date, "end_date")

        if end < start:
            raise InvalidRangeError(f"End date ({end}) must not precede start date ({start})")

        n_days = (end - start).days + 1
        if len(parsed) != n_days:
            raise LengthMismatchError(len(parsed), n_days)

        cells = [_make_cell(start + timedelta(days=i), v) for i, v in enumerate(parsed)]
        logger.debug("Mapped %d days from %s to %s", n_days, start, end)
        return cells

    def map_series(self, series: pd.Series) -> list[CalendarCell]:
        """Map a Series indexed by consecutive daily dates.

        The range is taken from the first and last index entries.

        Raises:
            InvalidInputError: If the series is empty, its index does not hold
                dates, or the dates are not consecutive days.
        """
        if series is None or len(series) == 0:
            raise InvalidInputError("Series must hold at least one value")

        # to_datetime would read integers as epoch nanoseconds
        if pd.api.types.is_numeric_dtype(series.index):
            raise InvalidInputError("Series index must hold dates, got numbers")
        try:
            index = pd.DatetimeIndex(pd.to_datetime(series.index))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Series index must hold dates") from exc
        if index.tz is not None:
            index = index.tz_localize(None)
        index = index.normalize()

        start = index[0].date()
        end = index[-1].date()
        if end >= start and not index.equals(pd.date_range(start, end, freq="D")):
            raise InvalidInputError("Series index must hold consecutive daily dates")

        return self.map(series, start, end)


_default_mapper = CalendarGridMapper()


def map_calendar_grid(
    values: Sequence[float] | np.ndarray | pd.Series,
    start_date: DateLike,
    end_date: DateLike,
) -> list[CalendarCell]:
    """Shorthand for ``CalendarGridMapper().map(...)``."""
    return _default_mapper.map(values, start_date, end_date)


def cells_to_frame(cells: Sequence[CalendarCell]) -> pd.DataFrame:
    """Convert cells to a DataFrame for plotting.

    Label columns are ordered categoricals: months Jan..Dec, weekdays Mon..Sun
    and month-year panels in chronological order.
    """
    frame = pd.DataFrame(
        [
            (c.date, c.value, c.year, c.month_label, c.weekday_label, c.week_of_month, c.month_year_label)
            for c in cells
        ],
        columns=FRAME_COLUMNS,
    )
    frame["date"] = pd.to_datetime(frame["date"])
    frame["value"] = frame["value"].astype(float)
    frame["month_label"] = pd.Categorical(frame["month_label"], categories=MONTH_LABELS, ordered=True)
    frame["weekday_label"] = pd.Categorical(frame["weekday_label"], categories=WEEKDAY_LABELS, ordered=True)
    # Cells arrive in date order, so first appearance is chronological
    panels = list(dict.fromkeys(frame["month_year_label"]))
    frame["month_year_label"] = pd.Categorical(frame["month_year_label"], categories=panels, ordered=True)
    return frame


def default_date_range(
    days: int = 365,
    clock: Callable[[], date] = date.today,
) -> tuple[date, date]:
    """Return ``(today - days, today)`` using an injected clock.

    Args:
        days: How far back the range starts.
        clock: Callable returning "today". Defaults to ``date.today``.
    """
    end = clock()
    return end - timedelta(days=days), end
