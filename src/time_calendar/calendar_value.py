"""
CalendarValue: a civil calendar moment.

A CalendarValue holds the seven calendar fields of a moment (year down to millisecond) in the proleptic Gregorian
calendar. It carries no timezone: the same value is read as wall-clock time in whichever zone the caller chooses.

Values are immutable. An invalid moment is represented by the single sentinel ``INVALID_DATE``, whose fields are
all NaN, so a value is either completely valid or completely invalid.

This module also holds the calendar rules everything else is built on (leap years, month lengths, ISO week-years)
and an explicit day-number calculator that maps (year, month, day) to a count of days since 1970-01-01 for any
integer year.

Example usage:

    value = create_date(2024, 2, 29, 12)
    value.is_valid()                        # True
    create_date(2023, 2, 29).is_valid()     # False
    start_of(value, "month")                # 2024-02-01T00:00:00.000
    end_of(value, BoundaryUnit.QUARTER)     # 2024-03-31T23:59:59.999
"""

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from time_calendar.enums import BoundaryUnit
from time_calendar.exceptions import UnhandledEnumError

FIELD_NAMES = ("year", "month", "day", "hour", "minute", "second", "millisecond")

# Inclusive ranges of the optional fields. Day is checked against the month length separately.
_FIELD_RANGES = {
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "millisecond": (0, 999),
}

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Days between 0000-03-01 and 1970-01-01 in the proleptic Gregorian calendar
_EPOCH_SHIFT = 719_468
_DAYS_IN_ERA = 146_097


@dataclass(frozen=True)
class CalendarValue:
    """A calendar moment with millisecond precision.

    Direct construction does not check the fields. Build values through ``create_date`` or ``date_from_mapping``
    when the fields come from outside; those return ``INVALID_DATE`` rather than a partially valid value. Every
    operation in the package treats a directly built invalid value exactly like ``INVALID_DATE``.
    """

    year: int
    month: int
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def is_valid(self) -> bool:
        return is_valid_date(self)

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    def __str__(self) -> str:
        if not self.is_valid():
            return "Invalid Date"
        sign = "-" if self.year < 0 else ""
        return (
            f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.millisecond:03d}"
        )


INVALID_DATE = CalendarValue(*(math.nan,) * len(FIELD_NAMES))


def as_valid_or_invalid(value: CalendarValue) -> CalendarValue:
    """Return the value unchanged if it is valid, otherwise the ``INVALID_DATE`` sentinel."""
    return value if value.is_valid() else INVALID_DATE


def _is_integer(value: Any) -> bool:
    """Check whether a field value is a finite integer. Integral floats (e.g. ``2024.0``) are accepted.

    Args:
        value: The field value to check

    Returns:
        True if the value can be used as an integer calendar field
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    return False


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar.

    Args:
        year: The year to check (zero and negative years are allowed).

    Returns:
        True if the year is divisible by 4 and either not divisible by 100 or divisible by 400.
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month.

    Args:
        year: The year (needed for February in leap years).
        month: The month (1-12).

    Returns:
        Number of days in the month.

    Raises:
        ValueError: If the month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12. Got: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def is_valid_date(value: CalendarValue | Mapping[str, Any]) -> bool:
    """Check that a set of calendar fields describes a real moment.

    Year and month are mandatory. The other fields are only checked if they are present (and not None), so a
    partial mapping such as ``{"year": 2024, "month": 2}`` is valid.

    Args:
        value: A CalendarValue, or a mapping of field names to values.

    Returns:
        True if every present field is an integer within its range.
    """
    fields = value.as_dict() if isinstance(value, CalendarValue) else value

    year = fields.get("year")
    month = fields.get("month")
    if not _is_integer(year) or not _is_integer(month):
        return False
    if not 1 <= month <= 12:
        return False

    day = fields.get("day")
    if day is not None:
        if not _is_integer(day) or not 1 <= day <= days_in_month(int(year), int(month)):
            return False

    for name, (lower, upper) in _FIELD_RANGES.items():
        field = fields.get(name)
        if field is None:
            continue
        if not _is_integer(field) or not lower <= field <= upper:
            return False

    return True


def create_date(
    year: int,
    month: int,
    day: int | None = None,
    hour: int | None = None,
    minute: int | None = None,
    second: int | None = None,
    millisecond: int | None = None,
) -> CalendarValue:
    """Create a validated CalendarValue. Missing fields default to their minimum.

    Returns:
        The CalendarValue, or ``INVALID_DATE`` if any field is out of range.
    """
    return date_from_mapping(
        {
            "year": year,
            "month": month,
            "day": day,
            "hour": hour,
            "minute": minute,
            "second": second,
            "millisecond": millisecond,
        }
    )


def date_from_mapping(fields: Mapping[str, Any]) -> CalendarValue:
    """Create a validated CalendarValue from a (possibly partial) mapping of calendar fields.

    Keys other than the seven calendar field names are ignored.

    Args:
        fields: Mapping of field names to values. ``year`` and ``month`` are required.

    Returns:
        The CalendarValue, or ``INVALID_DATE`` if the fields are not valid.
    """
    if not is_valid_date(fields):
        return INVALID_DATE

    return CalendarValue(
        year=int(fields["year"]),
        month=int(fields["month"]),
        day=int(fields.get("day") or 1),
        hour=int(fields.get("hour") or 0),
        minute=int(fields.get("minute") or 0),
        second=int(fields.get("second") or 0),
        millisecond=int(fields.get("millisecond") or 0),
    )


def days_from_civil(year: int, month: int, day: int) -> int:
    """Calculate the number of days between 1970-01-01 and the given date.

    The calculation counts in 400-year eras starting on March 1, so that the leap day falls at the end of each
    counting year. It works for any integer year.

    Args:
        year: The year
        month: The month (1-12)
        day: The day of the month

    Returns:
        Days since 1970-01-01 (negative for earlier dates)
    """
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = (month + 9) % 12  # March = 0
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_IN_ERA + day_of_era - _EPOCH_SHIFT


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of ``days_from_civil``.

    Args:
        days: Days since 1970-01-01

    Returns:
        Tuple of (year, month, day)
    """
    days += _EPOCH_SHIFT
    era = days // _DAYS_IN_ERA
    day_of_era = days - era * _DAYS_IN_ERA
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    if month <= 2:
        year += 1
    return year, month, day


def _weekday_of(year: int, month: int, day: int) -> int:
    # 1970-01-01 was a Thursday (4)
    return (days_from_civil(year, month, day) + 3) % 7 + 1


def iso_weekday(value: CalendarValue) -> int | float:
    """Return the ISO day of the week, Monday is 1 and Sunday is 7. NaN for an invalid value."""
    if not value.is_valid():
        return math.nan
    return _weekday_of(value.year, value.month, value.day)


def weeks_in_week_year(year: int) -> int:
    """Return the number of weeks in an ISO week-year.

    A week-year has 53 weeks if it starts on a Thursday, or if it is a leap year starting on a Wednesday.

    Args:
        year: The week-year

    Returns:
        52 or 53
    """
    jan_first = _weekday_of(year, 1, 1)
    if jan_first == 4 or (jan_first == 3 and is_leap_year(year)):
        return 53
    return 52


def quarter(value: CalendarValue) -> int | float:
    """Return the quarter of the year (1-4) the value falls in. NaN for an invalid value."""
    if not value.is_valid():
        return math.nan
    return (value.month - 1) // 3 + 1


def start_of(value: CalendarValue, unit: str | BoundaryUnit) -> CalendarValue:
    """Return the first moment of the period containing ``value``.

    Args:
        value: The calendar value
        unit: The period to truncate to

    Returns:
        A new CalendarValue at the start of the period, or ``INVALID_DATE`` for invalid input.
    """
    unit = BoundaryUnit(unit)
    if not value.is_valid():
        return INVALID_DATE

    if unit == BoundaryUnit.YEAR:
        return replace(value, month=1, day=1, hour=0, minute=0, second=0, millisecond=0)
    elif unit == BoundaryUnit.QUARTER:
        return replace(value, month=1 + (quarter(value) - 1) * 3, day=1, hour=0, minute=0, second=0, millisecond=0)
    elif unit == BoundaryUnit.MONTH:
        return replace(value, day=1, hour=0, minute=0, second=0, millisecond=0)
    elif unit == BoundaryUnit.DAY:
        return replace(value, hour=0, minute=0, second=0, millisecond=0)
    elif unit == BoundaryUnit.HOUR:
        return replace(value, minute=0, second=0, millisecond=0)
    elif unit == BoundaryUnit.MINUTE:
        return replace(value, second=0, millisecond=0)
    elif unit == BoundaryUnit.SECOND:
        return replace(value, millisecond=0)
    else:
        # Should never reach here, unless a new enum value is added in the future and logic has not been added here
        raise UnhandledEnumError(f"Unhandled boundary unit: {unit}")


def end_of(value: CalendarValue, unit: str | BoundaryUnit) -> CalendarValue:
    """Return the last millisecond of the period containing ``value``.

    Args:
        value: The calendar value
        unit: The period to extend to

    Returns:
        A new CalendarValue at the end of the period, or ``INVALID_DATE`` for invalid input.
    """
    unit = BoundaryUnit(unit)
    if not value.is_valid():
        return INVALID_DATE

    end_of_day = {"hour": 23, "minute": 59, "second": 59, "millisecond": 999}
    if unit == BoundaryUnit.YEAR:
        return replace(value, month=12, day=31, **end_of_day)
    elif unit == BoundaryUnit.QUARTER:
        month = 3 * quarter(value)
        return replace(value, month=month, day=days_in_month(value.year, month), **end_of_day)
    elif unit == BoundaryUnit.MONTH:
        return replace(value, day=days_in_month(value.year, value.month), **end_of_day)
    elif unit == BoundaryUnit.DAY:
        return replace(value, **end_of_day)
    elif unit == BoundaryUnit.HOUR:
        return replace(value, minute=59, second=59, millisecond=999)
    elif unit == BoundaryUnit.MINUTE:
        return replace(value, second=59, millisecond=999)
    elif unit == BoundaryUnit.SECOND:
        return replace(value, millisecond=999)
    else:
        # Should never reach here, unless a new enum value is added in the future and logic has not been added here
        raise UnhandledEnumError(f"Unhandled boundary unit: {unit}")
