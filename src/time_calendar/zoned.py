"""
Zoned conversion.

A CalendarValue carries no zone, it is read as wall-clock time in a zone chosen by the caller. This module moves
values between zones. Every conversion goes through UTC:

    wall clock in zone A  --(subtract offset of A)-->  UTC  --(add offset of B)-->  wall clock in zone B

so ``zone_to_zone(zoned_to_utc(v, A), "UTC", B)`` and ``zone_to_zone(v, A, B)`` always agree.

The offset of the target zone is taken at the exact UTC instant (``offset_at_utc``) rather than estimated from a
wall-clock reading, so the projection is exact across daylight saving transitions.
"""

import datetime as dt

from time_calendar.calendar_value import INVALID_DATE, CalendarValue
from time_calendar.convert import (
    MILLISECONDS_IN_HOUR,
    MILLISECONDS_IN_MINUTE,
    MILLISECONDS_IN_SECOND,
    date_to_instant,
    datetime_to_date,
    instant_to_date,
)
from time_calendar.timezone import UTC, TimezoneResolver, get_resolver


def zoned_to_utc(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> CalendarValue:
    """Express a wall-clock value from ``zone`` in UTC.

    Args:
        value: Wall-clock time in ``zone``
        zone: The zone the value is read in
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        The same moment as a UTC CalendarValue, or ``INVALID_DATE`` for invalid input.

    Raises:
        InvalidTimezoneError: If the zone name is not recognised.
    """
    offset = get_resolver(resolver).offset_of(value, zone)
    if not value.is_valid():
        return INVALID_DATE
    return instant_to_date(date_to_instant(value) - offset)


def zone_to_zone(
    value: CalendarValue, from_zone: str, to_zone: str, resolver: TimezoneResolver | None = None
) -> CalendarValue:
    """Re-express a wall-clock value from one zone as the wall-clock time of the same moment in another zone.

    Args:
        value: Wall-clock time in ``from_zone``
        from_zone: The zone the value is read in
        to_zone: The zone to project into
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        The wall-clock time in ``to_zone``, or ``INVALID_DATE`` for invalid input.

    Raises:
        InvalidTimezoneError: If either zone name is not recognised.
    """
    resolver = get_resolver(resolver)
    utc_value = zoned_to_utc(value, from_zone, resolver)
    offset = resolver.offset_at_utc(utc_value, to_zone)
    if not utc_value.is_valid():
        return INVALID_DATE
    return instant_to_date(date_to_instant(utc_value) + offset)


def to_local(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> CalendarValue:
    """Re-express a wall-clock value from ``zone`` in the host's zone."""
    resolver = get_resolver(resolver)
    return zone_to_zone(value, zone, resolver.local_zone_name(), resolver)


def now(zone: str = UTC, resolver: TimezoneResolver | None = None) -> CalendarValue:
    """Return the current moment as wall-clock time in ``zone``."""
    utc_now = datetime_to_date(dt.datetime.now(dt.timezone.utc))
    return zone_to_zone(utc_now, UTC, zone, resolver)


def offset_millisec(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> int:
    """Return the offset of ``zone`` from UTC for the wall-clock value, in milliseconds. Invalid values give 0."""
    return get_resolver(resolver).offset_of(value, zone)


def offset_sec(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> float:
    return offset_millisec(value, zone, resolver) / MILLISECONDS_IN_SECOND


def offset_min(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> float:
    return offset_millisec(value, zone, resolver) / MILLISECONDS_IN_MINUTE


def offset_hour(value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> float:
    return offset_millisec(value, zone, resolver) / MILLISECONDS_IN_HOUR
