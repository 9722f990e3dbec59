from __future__ import annotations

from enum import IntEnum


class Month(IntEnum):
    """Calendar months, valued 1..12 like ``date.month``."""

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Weekday(IntEnum):
    """Days of the week, valued with ISO numbering (Mon=1 .. Sun=7)."""

    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6
    SUN = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Fixed English abbreviations; strftime("%b") would follow the process locale
MONTH_LABELS: tuple[str, ...] = tuple(m.label for m in Month)
WEEKDAY_LABELS: tuple[str, ...] = tuple(d.label for d in Weekday)
