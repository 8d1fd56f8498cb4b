"""
Parsing of ISO 8601 date/time strings and of the other argument forms a calendar value can be built from.

The accepted ISO 8601 subset is:

    YYYY-MM-DD
    YYYY-MM-DDTHH:mm:ss
    YYYY-MM-DDTHH:mm:ss.sss
    ... followed optionally (after the time) by "Z", "+HH:mm", "-HH:mm", "+HHmm" or "-HHmm"

Parsing never raises. Malformed strings give ``INVALID_DATE``.
"""

import datetime as dt
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from time_calendar.arithmetic import adjust
from time_calendar.calendar_value import (
    INVALID_DATE,
    CalendarValue,
    as_valid_or_invalid,
    create_date,
    date_from_mapping,
)
from time_calendar.convert import (
    MILLISECONDS_IN_HOUR,
    MILLISECONDS_IN_MINUTE,
    array_to_date,
    datetime_to_date,
    instant_to_date,
)
from time_calendar.enums import DifferenceUnit

logger = logging.getLogger(__name__)

_ISO_REGEX = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,3}))?"
    r"(?P<zone>Z|[+-]\d{2}:?\d{2})?"
    r")?",
    flags=re.ASCII,
)


@dataclass(frozen=True)
class ParsedDate:
    """The result of parsing an ISO 8601 string.

    Attributes:
        value: The parsed calendar value. If the string carried a numeric offset, the value has been normalised to
               UTC. ``INVALID_DATE`` if the string could not be parsed.
        offset: The offset given in the string, in milliseconds east of UTC. 0 for "Z", None if the string had no
                zone suffix (the value is then wall-clock time in whatever zone the caller uses).
    """

    value: CalendarValue
    offset: int | None = None

    @property
    def has_offset(self) -> bool:
        return self.offset is not None


_INVALID_PARSE = ParsedDate(INVALID_DATE, None)


def _str2milliseconds(fraction: str | None) -> int:
    """Convert the fraction digits after the seconds ("5", "05" or "005") to milliseconds."""
    return 0 if fraction is None else int((fraction + "00")[:3])


def _offset_milliseconds(zone: str | None) -> int | None:
    """Convert a zone suffix to a signed offset in milliseconds.

    Args:
        zone: "Z", "+HH:mm", "-HHmm" etc., or None

    Returns:
        The offset in milliseconds, or None if there was no suffix

    Raises:
        ValueError: If the hours or minutes are out of range.
    """
    if zone is None:
        return None
    if zone == "Z":
        return 0

    digits = zone[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:])
    if hours > 23 or minutes > 59:
        raise ValueError(f"Offset out of range: {zone}")

    offset = hours * MILLISECONDS_IN_HOUR + minutes * MILLISECONDS_IN_MINUTE
    return -offset if zone[0] == "-" else offset


def parse_iso(text: str) -> ParsedDate:
    """Parse an ISO 8601 date/time string.

    A numeric offset in the string is removed from the parsed fields, so ``"2020-01-01T00:00:00+02:00"`` gives the
    UTC value ``2019-12-31T22:00:00.000`` with ``offset`` of two hours.

    Args:
        text: The string to parse

    Returns:
        A ParsedDate. Its value is ``INVALID_DATE`` if the string is not in the accepted format or describes a
        moment that does not exist.
    """
    if not isinstance(text, str):
        return _INVALID_PARSE

    matcher = _ISO_REGEX.fullmatch(text)
    if matcher is None:
        logger.debug("Not an ISO 8601 date/time string: %r", text)
        return _INVALID_PARSE

    try:
        offset = _offset_milliseconds(matcher.group("zone"))
    except ValueError:
        logger.debug("Invalid UTC offset in %r", text)
        return _INVALID_PARSE

    value = create_date(
        year=int(matcher.group("year")),
        month=int(matcher.group("month")),
        day=int(matcher.group("day")),
        hour=int(matcher.group("hour") or 0),
        minute=int(matcher.group("minute") or 0),
        second=int(matcher.group("second") or 0),
        millisecond=_str2milliseconds(matcher.group("fraction")),
    )
    if not value.is_valid():
        logger.debug("Date/time fields out of range in %r", text)
        return _INVALID_PARSE

    if offset:
        # The fields are local time at the given offset. Subtract the offset to get UTC.
        value = instant_to_date(adjust(value, {DifferenceUnit.MILLISECOND: abs(offset)}, positive=offset < 0))

    return ParsedDate(value, offset)


def parse_value(arg: Any) -> CalendarValue:
    """Build a CalendarValue from any of the supported input forms.

    Args:
        arg: One of:
             - a CalendarValue (returned unchanged if valid)
             - an integer instant (milliseconds since the epoch)
             - a ``datetime.datetime`` or ``datetime.date``
             - a mapping of calendar field names to values
             - a sequence of calendar fields ``[year, month, day, ...]``
             - an ISO 8601 string (numeric offsets are normalised to UTC)

    Returns:
        The CalendarValue, or ``INVALID_DATE`` if the argument cannot be converted.
    """
    if isinstance(arg, CalendarValue):
        return as_valid_or_invalid(arg)
    if isinstance(arg, str):
        return parse_iso(arg).value
    if isinstance(arg, (dt.date, dt.datetime)):
        return datetime_to_date(arg)
    if isinstance(arg, Mapping):
        return date_from_mapping(arg)
    if isinstance(arg, Sequence):
        return array_to_date(arg)
    if isinstance(arg, (int, float)):
        return instant_to_date(arg)
    return INVALID_DATE
