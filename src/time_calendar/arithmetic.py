"""
Calendar arithmetic.

A date difference is a sparse mapping of units to non-negative magnitudes, e.g. ``{"month": 1, "day": 2}``. It is
applied to a CalendarValue in two phases, always in this order:

1. Calendar phase (years, months): the year and month fields are moved directly and the day is clamped to the
   length of the new month, so ``2024-01-31 + 1 month`` is ``2024-02-29`` and not ``2024-03-02``.
2. Duration phase (weeks, days, hours, minutes, seconds, milliseconds): the result of the calendar phase is
   converted to a linear instant and the fixed-length units are added as milliseconds.

The two phases do not commute: ``2024-01-30 + 1 month + 1 day`` gives ``2024-03-01`` whereas adding the day first
would give ``2024-02-29``. Because the calendar phase never touches an instant it keeps wall-clock intent across
daylight saving transitions; the duration phase is linear and does not.

The ``positive`` flag gives the sign of every unit. There are no per-unit signs.
"""

from collections.abc import Mapping
from dataclasses import replace

from time_calendar.calendar_value import INVALID_DATE, CalendarValue, days_in_month
from time_calendar.convert import (
    MILLISECONDS_IN_DAY,
    MILLISECONDS_IN_HOUR,
    MILLISECONDS_IN_MINUTE,
    MILLISECONDS_IN_SECOND,
    MILLISECONDS_IN_WEEK,
    date_to_instant,
    instant_to_date,
)
from time_calendar.enums import DifferenceUnit
from time_calendar.exceptions import DateDifferenceError

DateDifference = Mapping[str | DifferenceUnit, int]

_UNIT_MILLISECONDS = {
    DifferenceUnit.WEEK: MILLISECONDS_IN_WEEK,
    DifferenceUnit.DAY: MILLISECONDS_IN_DAY,
    DifferenceUnit.HOUR: MILLISECONDS_IN_HOUR,
    DifferenceUnit.MINUTE: MILLISECONDS_IN_MINUTE,
    DifferenceUnit.SECOND: MILLISECONDS_IN_SECOND,
    DifferenceUnit.MILLISECOND: 1,
}


def normalise_difference(diff: DateDifference) -> dict[DifferenceUnit, int]:
    """Check a date difference and key it by ``DifferenceUnit``.

    Args:
        diff: Mapping of unit names (or DifferenceUnit members) to magnitudes

    Returns:
        Dictionary of DifferenceUnit to magnitude, containing only the units that were given

    Raises:
        DateDifferenceError: If a unit is unknown, appears twice, or its magnitude is not a non-negative integer.
    """
    units = {}
    for key, magnitude in diff.items():
        try:
            unit = DifferenceUnit(key)
        except ValueError as err:
            raise DateDifferenceError(f"Unknown date difference unit: '{key}'") from err

        if unit in units:
            raise DateDifferenceError(f"Duplicate date difference unit: '{unit.value}'")
        if isinstance(magnitude, bool) or not isinstance(magnitude, int):
            raise DateDifferenceError(f"Magnitude of '{unit.value}' must be an integer. Got: {magnitude!r}")
        if magnitude < 0:
            raise DateDifferenceError(f"Magnitude of '{unit.value}' must not be negative. Got: {magnitude}")

        units[unit] = magnitude
    return units


def shift_months(value: CalendarValue, shift_amount: int) -> CalendarValue:
    """Shift a CalendarValue by a number of months (+ve or -ve), clamping the day to the length of the new month.

    Args:
        value: The calendar value to be shifted
        shift_amount: The number of months by which to shift the value

    Returns:
        A new CalendarValue, or ``INVALID_DATE`` if ``value`` is invalid.
    """
    if not value.is_valid():
        return INVALID_DATE
    if shift_amount == 0:
        return value
    y_m = value.year * 12 + value.month - 1
    new_year, new_month0 = divmod(y_m + shift_amount, 12)
    new_month = new_month0 + 1
    day = value.day
    if day <= 28:
        return replace(value, year=new_year, month=new_month)
    return replace(value, year=new_year, month=new_month, day=min(day, days_in_month(new_year, new_month)))


def adjust(base: CalendarValue, diff: DateDifference, positive: bool = True) -> int | float:
    """Apply a date difference to a CalendarValue.

    Args:
        base: The calendar value to start from
        diff: The date difference to apply
        positive: Add the difference if True, subtract it if False

    Returns:
        The resulting linear instant (milliseconds since the epoch), or NaN if ``base`` is invalid.

    Raises:
        DateDifferenceError: If the difference is malformed.
    """
    units = normalise_difference(diff)
    if not base.is_valid():
        return date_to_instant(base)

    sign = 1 if positive else -1

    months = 12 * units.get(DifferenceUnit.YEAR, 0) + units.get(DifferenceUnit.MONTH, 0)
    shifted = shift_months(base, sign * months)

    duration = sum(magnitude * _UNIT_MILLISECONDS[unit] for unit, magnitude in units.items() if not unit.is_calendar)
    return date_to_instant(shifted) + sign * duration


def add(base: CalendarValue, diff: DateDifference) -> CalendarValue:
    """Return ``base`` moved forward by the date difference."""
    return instant_to_date(adjust(base, diff, positive=True))


def subtract(base: CalendarValue, diff: DateDifference) -> CalendarValue:
    """Return ``base`` moved backward by the date difference."""
    return instant_to_date(adjust(base, diff, positive=False))
