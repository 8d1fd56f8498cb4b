"""
Time Calendar Enumerations.

This module defines the enums used throughout time_calendar to standardise unit names across the package.
"""

from enum import Enum


class DifferenceUnit(Enum):
    """Enum representing the units that can appear in a date difference.

    The calendar units (YEAR, MONTH) move the calendar fields directly. The remaining units are fixed-length and
    are applied on the linear millisecond timeline.

    Attributes:
        YEAR: Calendar years (12 months).
        MONTH: Calendar months, with the day clamped to the length of the target month.
        WEEK: 7 days.
        DAY: 24 hours.
        HOUR: 60 minutes.
        MINUTE: 60 seconds.
        SECOND: 1000 milliseconds.
        MILLISECOND: The smallest supported unit.
    """

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"

    @property
    def is_calendar(self) -> bool:
        return self in (DifferenceUnit.YEAR, DifferenceUnit.MONTH)


class BoundaryUnit(Enum):
    """Enum representing the periods a calendar value can be truncated to (start of) or extended to (end of).

    Attributes:
        YEAR: January 1 / December 31.
        QUARTER: First day of the quarter's first month / last day of its last month.
        MONTH: First / last day of the month.
        DAY: Midnight / 23:59:59.999.
        HOUR: Start / end of the hour.
        MINUTE: Start / end of the minute.
        SECOND: Start / end of the second.
    """

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
