from __future__ import annotations


class CalendarGridError(ValueError):
    """Base class for calendar grid validation failures."""


class InvalidInputError(CalendarGridError):
    """Values are missing or not a sequence of real numbers, or a date is unreadable."""


class InvalidRangeError(CalendarGridError):
    """End date precedes start date."""


class LengthMismatchError(CalendarGridError):
    """Number of values differs from the number of days in the range."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(
            f"Length of values ({provided}) must match number of days between dates ({expected})"
        )
