"""
Comparison of calendar values.

Values are compared by the UTC instant they denote, so each value is paired with the zone it is read in.
Differences are absolute by default; pass ``signed=True`` to keep the direction (positive when ``other`` is later
than ``base``).
"""

import math
from collections.abc import Sequence

import polars as pl

from time_calendar.calendar_value import INVALID_DATE, CalendarValue
from time_calendar.convert import (
    MILLISECONDS_IN_DAY,
    MILLISECONDS_IN_HOUR,
    MILLISECONDS_IN_MINUTE,
    MILLISECONDS_IN_SECOND,
    date_to_instant,
)
from time_calendar.series import to_series
from time_calendar.timezone import UTC, TimezoneResolver, get_resolver
from time_calendar.zoned import now, zoned_to_utc


def _utc_instant(value: CalendarValue, timezone: str, resolver: TimezoneResolver | None) -> int | float:
    return date_to_instant(zoned_to_utc(value, timezone, resolver))


def diff_in_millisec(
    base: CalendarValue,
    other: CalendarValue,
    timezone: str = UTC,
    other_timezone: str | None = None,
    signed: bool = False,
    resolver: TimezoneResolver | None = None,
) -> int | float:
    """Return the number of milliseconds between two moments.

    Args:
        base: The first value
        other: The second value
        timezone: The zone ``base`` is read in
        other_timezone: The zone ``other`` is read in (defaults to ``timezone``)
        signed: Keep the direction of the difference (``other - base``) instead of returning its magnitude
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        The difference in milliseconds, or NaN if either value is invalid.
    """
    resolver = get_resolver(resolver)
    if other_timezone is None:
        other_timezone = timezone

    diff = _utc_instant(other, other_timezone, resolver) - _utc_instant(base, timezone, resolver)
    return diff if signed else abs(diff)


def _diff_in_unit(
    base: CalendarValue,
    other: CalendarValue,
    unit_milliseconds: int,
    show_decimal: bool,
    timezone: str,
    other_timezone: str | None,
    signed: bool,
    resolver: TimezoneResolver | None,
) -> int | float:
    diff = diff_in_millisec(base, other, timezone, other_timezone, signed, resolver) / unit_milliseconds
    if show_decimal or math.isnan(diff):
        return diff
    return math.trunc(diff)


def diff_in_sec(
    base: CalendarValue,
    other: CalendarValue,
    timezone: str = UTC,
    other_timezone: str | None = None,
    signed: bool = False,
    resolver: TimezoneResolver | None = None,
) -> int | float:
    """Return the number of whole seconds between two moments."""
    return _diff_in_unit(base, other, MILLISECONDS_IN_SECOND, False, timezone, other_timezone, signed, resolver)


def diff_in_min(
    base: CalendarValue,
    other: CalendarValue,
    show_decimal: bool = False,
    timezone: str = UTC,
    other_timezone: str | None = None,
    signed: bool = False,
    resolver: TimezoneResolver | None = None,
) -> int | float:
    """Return the number of minutes between two moments, truncated unless ``show_decimal`` is True."""
    return _diff_in_unit(
        base, other, MILLISECONDS_IN_MINUTE, show_decimal, timezone, other_timezone, signed, resolver
    )


def diff_in_hours(
    base: CalendarValue,
    other: CalendarValue,
    show_decimal: bool = False,
    timezone: str = UTC,
    other_timezone: str | None = None,
    signed: bool = False,
    resolver: TimezoneResolver | None = None,
) -> int | float:
    """Return the number of hours between two moments, truncated unless ``show_decimal`` is True."""
    return _diff_in_unit(base, other, MILLISECONDS_IN_HOUR, show_decimal, timezone, other_timezone, signed, resolver)


def diff_in_days(
    base: CalendarValue,
    other: CalendarValue,
    show_decimal: bool = False,
    timezone: str = UTC,
    other_timezone: str | None = None,
    signed: bool = False,
    resolver: TimezoneResolver | None = None,
) -> int | float:
    """Return the number of days (24 hour periods) between two moments, truncated unless ``show_decimal`` is True."""
    return _diff_in_unit(base, other, MILLISECONDS_IN_DAY, show_decimal, timezone, other_timezone, signed, resolver)


def _valid_instants(
    values: Sequence[CalendarValue], timezone: str, resolver: TimezoneResolver | None
) -> pl.Series:
    """Return the UTC instants of the values as integers, with invalid values as nulls.

    An all-null Series is replaced by an empty one so that arg_max and arg_min give None.
    """
    instants = to_series(values, timezone=timezone, resolver=resolver).to_physical()
    if instants.null_count() == instants.len():
        return instants.clear()
    return instants


def latest(
    values: Sequence[CalendarValue], timezone: str = UTC, resolver: TimezoneResolver | None = None
) -> CalendarValue:
    """Return the latest of the values. Invalid values are ignored.

    Args:
        values: Wall-clock values in ``timezone``
        timezone: The zone the values are read in
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        The latest value, or ``INVALID_DATE`` if there are no valid values.
    """
    index = _valid_instants(values, timezone, resolver).arg_max()
    return INVALID_DATE if index is None else values[index]


def oldest(
    values: Sequence[CalendarValue], timezone: str = UTC, resolver: TimezoneResolver | None = None
) -> CalendarValue:
    """Return the oldest of the values. Invalid values are ignored.

    Args:
        values: Wall-clock values in ``timezone``
        timezone: The zone the values are read in
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        The oldest value, or ``INVALID_DATE`` if there are no valid values.
    """
    index = _valid_instants(values, timezone, resolver).arg_min()
    return INVALID_DATE if index is None else values[index]


def is_before(value: CalendarValue, timezone: str = UTC, resolver: TimezoneResolver | None = None) -> bool:
    """Check whether the moment is in the past."""
    return _utc_instant(value, timezone, resolver) < date_to_instant(now(resolver=resolver))


def is_after(value: CalendarValue, timezone: str = UTC, resolver: TimezoneResolver | None = None) -> bool:
    """Check whether the moment is in the future."""
    return _utc_instant(value, timezone, resolver) > date_to_instant(now(resolver=resolver))
