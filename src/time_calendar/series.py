"""
Conversion between CalendarValues and Polars datetime Series.

The Series holds UTC instants with millisecond precision (``pl.Datetime("ms")``), which makes it the natural form
for ordering and aggregating many calendar values at once. Invalid values are represented as nulls.
"""

from collections.abc import Iterable

import polars as pl

from time_calendar.calendar_value import INVALID_DATE, CalendarValue
from time_calendar.convert import date_to_instant, instant_to_date
from time_calendar.exceptions import InvalidTimezoneError
from time_calendar.timezone import UTC, TimezoneResolver, get_resolver
from time_calendar.zoned import zone_to_zone, zoned_to_utc


def _checked_resolver(timezone: str, resolver: TimezoneResolver | None) -> TimezoneResolver:
    """Return the resolver to use, having checked that it knows ``timezone``."""
    resolver = get_resolver(resolver)
    if not resolver.is_valid_zone(timezone):
        raise InvalidTimezoneError(zone=timezone)
    return resolver


def to_series(
    values: Iterable[CalendarValue],
    name: str = "time",
    timezone: str = UTC,
    resolver: TimezoneResolver | None = None,
) -> pl.Series:
    """Convert calendar values to a Polars Series of UTC datetimes.

    Args:
        values: Wall-clock values in ``timezone``
        name: The name of the Series
        timezone: The zone the values are read in
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        A ``pl.Datetime("ms")`` Series of the equivalent UTC datetimes. Invalid values become nulls.

    Raises:
        InvalidTimezoneError: If the zone name is not recognised, even when no value is valid.
    """
    resolver = _checked_resolver(timezone, resolver)
    instants = []
    for value in values:
        if value.is_valid():
            instants.append(date_to_instant(zoned_to_utc(value, timezone, resolver)))
        else:
            instants.append(None)

    return pl.Series(name, instants, dtype=pl.Int64).cast(pl.Datetime("ms"))


def from_series(
    date_times: pl.Series,
    timezone: str = UTC,
    resolver: TimezoneResolver | None = None,
) -> list[CalendarValue]:
    """Convert a Polars Series of dates or datetimes to calendar values.

    Naive datetimes are taken to be UTC. Timezone-aware datetimes are read as the instants they denote.

    Args:
        date_times: A Series of ``pl.Date`` or ``pl.Datetime`` values
        timezone: The zone to express the values in
        resolver: The timezone resolver to use (defaults to the zoneinfo resolver)

    Returns:
        A list of CalendarValues, wall-clock time in ``timezone``. Nulls become ``INVALID_DATE``.

    Raises:
        TypeError: If the Series is not of a date or datetime type.
        InvalidTimezoneError: If the zone name is not recognised.
    """
    # Need to ensure we're dealing with datetimes rather than just "dates"
    if date_times.dtype == pl.Date:
        date_times = date_times.cast(pl.Datetime("ms"))
    if not isinstance(date_times.dtype, pl.Datetime):
        raise TypeError(f"Series must be of type Date or Datetime. Got: '{date_times.dtype}'")

    resolver = _checked_resolver(timezone, resolver)
    values = []
    for instant in date_times.dt.epoch("ms"):
        if instant is None:
            values.append(INVALID_DATE)
        else:
            values.append(zone_to_zone(instant_to_date(instant), UTC, timezone, resolver))
    return values
