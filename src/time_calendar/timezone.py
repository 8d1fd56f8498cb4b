"""
Timezone offset resolution.

This module is the boundary between the calendar engine and the timezone database. The engine only ever asks two
questions of a zone: "what is your UTC offset around this moment?" and "which zone is the host running in?".
Those questions are described by the ``TimezoneResolver`` abstract class, so that a different database (or a test
double) can be plugged into every zone-aware function through its ``resolver`` argument.

The default ``ZoneInfoResolver`` answers from the standard library ``zoneinfo`` module, which reads the system
timezone database or the ``tzdata`` package.

Offsets are signed milliseconds east of UTC: ``+3_600_000`` for Europe/Paris in winter.

Wall-clock readings that are ambiguous (the repeated hour when clocks go back) or that do not exist (the skipped
hour when clocks go forward) are resolved with ``fold=0``, i.e. always with the offset that was in force before the
transition. For a repeated hour that is the earlier of the two instants.
"""

import datetime as dt
import logging
import os
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from time_calendar.calendar_value import CalendarValue, days_in_month
from time_calendar.exceptions import InvalidTimezoneError

logger = logging.getLogger(__name__)

UTC = "UTC"
LOCAL = "local"

# The stdlib datetime range, kept one year clear of its edges so that offset arithmetic cannot overflow
_MIN_SUPPORTED_YEAR = 2
_MAX_SUPPORTED_YEAR = 9998

_LOCALTIME_PATH = Path("/etc/localtime")
_TIMEZONE_PATH = Path("/etc/timezone")
_EPOCH_PROBE = CalendarValue(1970, 1, 1)


@lru_cache(maxsize=512)
def _zone_info(zone: str) -> dt.tzinfo:
    """Look up the tzinfo object for a zone name.

    Zone objects are cached by name. Offsets are never cached, they are always computed for the requested moment.

    Args:
        zone: The zone name

    Returns:
        A tzinfo object

    Raises:
        InvalidTimezoneError: If the zone name is unknown to the timezone database.
    """
    if zone == UTC:
        return dt.timezone.utc
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        raise InvalidTimezoneError(zone=zone) from err


def _to_naive_datetime(value: CalendarValue) -> dt.datetime:
    """Convert a CalendarValue to a naive stdlib datetime, moving years outside the supported range to the nearest
    supported year. Zone rules do not change that far from the present, so the offset is unaffected.

    Args:
        value: A valid calendar value

    Returns:
        A naive datetime object
    """
    year = min(max(value.year, _MIN_SUPPORTED_YEAR), _MAX_SUPPORTED_YEAR)
    day = min(value.day, days_in_month(year, value.month))
    return dt.datetime(
        year, value.month, day, value.hour, value.minute, value.second, value.millisecond * 1_000
    )


def _to_milliseconds(delta: dt.timedelta | None) -> int:
    if delta is None:
        return 0
    return delta // dt.timedelta(milliseconds=1)


class TimezoneResolver(ABC):
    """Provides UTC offsets for named timezones."""

    @abstractmethod
    def offset_of(self, wall_clock: CalendarValue, zone: str) -> int:
        """Return the UTC offset of ``zone`` for a wall-clock reading in that zone.

        Args:
            wall_clock: The (approximate) local time at which to evaluate the offset
            zone: The zone name

        Returns:
            Signed milliseconds east of UTC

        Raises:
            InvalidTimezoneError: If the zone name is not recognised.
        """

    @abstractmethod
    def offset_at_utc(self, utc_value: CalendarValue, zone: str) -> int:
        """Return the UTC offset of ``zone`` at the instant that ``utc_value`` denotes in UTC.

        Args:
            utc_value: The moment, expressed in UTC
            zone: The zone name

        Returns:
            Signed milliseconds east of UTC

        Raises:
            InvalidTimezoneError: If the zone name is not recognised.
        """

    @abstractmethod
    def local_zone_name(self) -> str:
        """Return the name of the zone the host is configured with."""

    def is_valid_zone(self, zone: str) -> bool:
        """Check whether a zone name can be resolved. Never raises.

        Args:
            zone: The zone name

        Returns:
            True if the zone is known
        """
        try:
            self.offset_of(_EPOCH_PROBE, zone)
        except InvalidTimezoneError:
            return False
        return True


class ZoneInfoResolver(TimezoneResolver):
    """Timezone resolver backed by the standard library ``zoneinfo`` module.

    Besides IANA names, ``"UTC"`` is the fixed UTC zone and ``"local"`` is an alias for the host zone.
    """

    def tzinfo(self, zone: str) -> dt.tzinfo:
        """Return the tzinfo object for a zone name.

        Raises:
            InvalidTimezoneError: If the zone name is not recognised.
        """
        if not isinstance(zone, str) or not zone:
            raise InvalidTimezoneError(zone=zone)
        if zone == LOCAL:
            zone = self.local_zone_name()
        return _zone_info(zone)

    def offset_of(self, wall_clock: CalendarValue, zone: str) -> int:
        tz = self.tzinfo(zone)
        if not wall_clock.is_valid():
            # The offset of an invalid value is defined as zero rather than whatever the database makes of NaN
            return 0
        local_dt = _to_naive_datetime(wall_clock).replace(tzinfo=tz, fold=0)
        return _to_milliseconds(local_dt.utcoffset())

    def offset_at_utc(self, utc_value: CalendarValue, zone: str) -> int:
        tz = self.tzinfo(zone)
        if not utc_value.is_valid():
            return 0
        local_dt = tz.fromutc(_to_naive_datetime(utc_value).replace(tzinfo=tz))
        return _to_milliseconds(local_dt.utcoffset())

    def local_zone_name(self) -> str:
        """Return the host zone name.

        The ``TZ`` environment variable is used if it names a known zone. Otherwise the zone is read from the
        ``/etc/localtime`` symlink, then from ``/etc/timezone``. If all of these fail, ``"UTC"`` is returned.

        Returns:
            The host zone name
        """
        for source, candidate in self._local_zone_candidates():
            if candidate and self._is_known(candidate):
                logger.debug("Local timezone %r taken from %s", candidate, source)
                return candidate
            if candidate:
                logger.debug("Ignoring unknown timezone %r from %s", candidate, source)

        logger.debug("Could not determine the local timezone, falling back to %s", UTC)
        return UTC

    @staticmethod
    def _is_known(zone: str) -> bool:
        try:
            _zone_info(zone)
        except InvalidTimezoneError:
            return False
        return True

    @staticmethod
    def _local_zone_candidates():
        """Yield (source, zone name) pairs in order of preference."""
        tz_env = os.environ.get("TZ")
        if tz_env:
            yield "TZ environment variable", tz_env.lstrip(":")

        if _LOCALTIME_PATH.is_symlink():
            target = str(_LOCALTIME_PATH.resolve())
            if "zoneinfo/" in target:
                yield str(_LOCALTIME_PATH), target.split("zoneinfo/", 1)[1]

        if _TIMEZONE_PATH.is_file():
            lines = _TIMEZONE_PATH.read_text().splitlines()
            if lines:
                yield str(_TIMEZONE_PATH), lines[0].strip()


DEFAULT_RESOLVER = ZoneInfoResolver()


def get_resolver(resolver: TimezoneResolver | None = None) -> TimezoneResolver:
    """Return the given resolver, or the default ``ZoneInfoResolver`` if None."""
    return DEFAULT_RESOLVER if resolver is None else resolver


def offset_of(wall_clock: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> int:
    """Return the UTC offset (milliseconds) of ``zone`` for a wall-clock reading in that zone."""
    return get_resolver(resolver).offset_of(wall_clock, zone)


def offset_at_utc(utc_value: CalendarValue, zone: str, resolver: TimezoneResolver | None = None) -> int:
    """Return the UTC offset (milliseconds) of ``zone`` at the moment ``utc_value`` denotes in UTC."""
    return get_resolver(resolver).offset_at_utc(utc_value, zone)


def local_zone_name(resolver: TimezoneResolver | None = None) -> str:
    """Return the name of the host's zone."""
    return get_resolver(resolver).local_zone_name()


def is_valid_zone(zone: str, resolver: TimezoneResolver | None = None) -> bool:
    """Check whether a zone name can be resolved. Never raises."""
    return get_resolver(resolver).is_valid_zone(zone)
