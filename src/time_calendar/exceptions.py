class TimeCalendarError(Exception):
    """Base class for custom errors in the time-calendar package."""


class InvalidTimezoneError(TimeCalendarError, ValueError):
    """Raised when a timezone name cannot be resolved by the timezone database."""

    def __init__(self, msg: str | None = None, zone: object = None):
        if not msg:
            msg = f"Invalid timezone: {zone!r}"
        self.zone = zone
        super().__init__(msg)


class DateDifferenceError(TimeCalendarError, ValueError):
    """Raised when a date difference contains unknown units or invalid magnitudes."""


class UnhandledEnumError(TimeCalendarError):
    """Base class for unhandled enumeration related errors."""
