"""Calendar grid coordinates for daily values."""

from .errors import CalendarGridError, InvalidInputError, InvalidRangeError, LengthMismatchError
from .labels import MONTH_LABELS, WEEKDAY_LABELS, Month, Weekday
from .mapper import (
    CalendarCell,
    CalendarGridMapper,
    cells_to_frame,
    coerce_date,
    default_date_range,
    map_calendar_grid,
    week_of_month,
)

__all__ = [
    "CalendarCell",
    "CalendarGridError",
    "CalendarGridMapper",
    "InvalidInputError",
    "InvalidRangeError",
    "LengthMismatchError",
    "MONTH_LABELS",
    "Month",
    "WEEKDAY_LABELS",
    "Weekday",
    "cells_to_frame",
    "coerce_date",
    "default_date_range",
    "map_calendar_grid",
    "week_of_month",
]
