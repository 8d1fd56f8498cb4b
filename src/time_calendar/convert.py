"""
Conversions between CalendarValues and their other representations.

- The linear instant: an integer number of milliseconds since 1970-01-01T00:00:00.000, with the calendar fields
  read as UTC (no offset applied).
- The field array: ``[year, month, day, hour, minute, second, millisecond]``.
- Standard library ``datetime`` objects.
"""

import datetime as dt
import math
from collections.abc import Sequence
from typing import Any

from time_calendar.calendar_value import (
    FIELD_NAMES,
    INVALID_DATE,
    CalendarValue,
    as_valid_or_invalid,
    civil_from_days,
    date_from_mapping,
    days_from_civil,
)

MILLISECONDS_IN_SECOND = 1_000
MILLISECONDS_IN_MINUTE = 60 * MILLISECONDS_IN_SECOND
MILLISECONDS_IN_HOUR = 60 * MILLISECONDS_IN_MINUTE
MILLISECONDS_IN_DAY = 24 * MILLISECONDS_IN_HOUR
MILLISECONDS_IN_WEEK = 7 * MILLISECONDS_IN_DAY


def date_to_instant(value: CalendarValue) -> int | float:
    """Convert a CalendarValue to a linear instant.

    The fields are interpreted as UTC. Zone handling is done by the callers in ``time_calendar.zoned``.

    Args:
        value: The calendar value

    Returns:
        Milliseconds since the epoch, or NaN if the value is invalid.
    """
    if not value.is_valid():
        return math.nan

    days = days_from_civil(value.year, value.month, value.day)
    return (
        days * MILLISECONDS_IN_DAY
        + value.hour * MILLISECONDS_IN_HOUR
        + value.minute * MILLISECONDS_IN_MINUTE
        + value.second * MILLISECONDS_IN_SECOND
        + value.millisecond
    )


def instant_to_date(instant: int | float) -> CalendarValue:
    """Convert a linear instant to a CalendarValue.

    Args:
        instant: Milliseconds since the epoch. Fractional milliseconds are floored.

    Returns:
        The CalendarValue in UTC, or ``INVALID_DATE`` if the instant is not a finite number.
    """
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        return INVALID_DATE
    if isinstance(instant, float):
        if not math.isfinite(instant):
            return INVALID_DATE
        instant = math.floor(instant)

    days, remainder = divmod(instant, MILLISECONDS_IN_DAY)
    hour, remainder = divmod(remainder, MILLISECONDS_IN_HOUR)
    minute, remainder = divmod(remainder, MILLISECONDS_IN_MINUTE)
    second, millisecond = divmod(remainder, MILLISECONDS_IN_SECOND)
    year, month, day = civil_from_days(days)

    return CalendarValue(year, month, day, hour, minute, second, millisecond)


def date_to_array(value: CalendarValue) -> list[int | float]:
    """Return the calendar fields as ``[year, month, day, hour, minute, second, millisecond]``.

    Returns:
        The seven fields. All NaN if the value is invalid.
    """
    value = as_valid_or_invalid(value)
    return [getattr(value, name) for name in FIELD_NAMES]


def array_to_date(fields: Sequence[Any]) -> CalendarValue:
    """Create a CalendarValue from an ordered sequence of calendar fields.

    Args:
        fields: ``[year, month, day, hour, minute, second, millisecond]``. Trailing fields after the month may be
                left out and default to their minimum.

    Returns:
        The CalendarValue, or ``INVALID_DATE`` if the sequence is too short, too long or holds an invalid field.
    """
    if isinstance(fields, (str, bytes)) or not 2 <= len(fields) <= len(FIELD_NAMES):
        return INVALID_DATE
    return date_from_mapping(dict(zip(FIELD_NAMES, fields)))


def date_to_day_of_year(value: CalendarValue) -> int | float:
    """Return the 1-based day of the year, so January 1 is day 1 and December 31 is day 365 or 366.

    Returns:
        The day of the year, or NaN if the value is invalid.
    """
    if not value.is_valid():
        return math.nan
    return days_from_civil(value.year, value.month, value.day) - days_from_civil(value.year, 1, 1) + 1


def datetime_to_date(datetime_obj: dt.datetime | dt.date) -> CalendarValue:
    """Create a CalendarValue from a standard library date or datetime object.

    Timezone aware datetimes are converted to UTC first. Microseconds are truncated to milliseconds.

    Args:
        datetime_obj: The input date or datetime object

    Returns:
        A CalendarValue
    """
    if not isinstance(datetime_obj, dt.datetime):
        return CalendarValue(datetime_obj.year, datetime_obj.month, datetime_obj.day)

    if datetime_obj.tzinfo is not None:
        datetime_obj = datetime_obj.astimezone(dt.timezone.utc)

    return CalendarValue(
        datetime_obj.year,
        datetime_obj.month,
        datetime_obj.day,
        datetime_obj.hour,
        datetime_obj.minute,
        datetime_obj.second,
        datetime_obj.microsecond // 1_000,
    )
