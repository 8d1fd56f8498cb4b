from typing import TYPE_CHECKING, Any

import autosemver

if TYPE_CHECKING:
    # These imports are only for static type checkers (e.g., Pyright, IDEs).
    # At runtime, they are not executed, so the modules won't be imported unless needed.
    from time_calendar.arithmetic import add, adjust, subtract
    from time_calendar.calendar_value import INVALID_DATE, CalendarValue, create_date
    from time_calendar.convert import date_to_instant, instant_to_date
    from time_calendar.parse import parse_iso, parse_value
    from time_calendar.zoned import zone_to_zone, zoned_to_utc

try:
    __version__ = autosemver.packaging.get_current_version(project_name="time_calendar")
except Exception:
    __version__ = "0.0.0"


# Declare the public API of the package. This tells `from time_calendar import *` what to include.
__all__ = [  # noqa
    "CalendarValue",
    "INVALID_DATE",
    "create_date",
    "date_to_instant",
    "instant_to_date",
    "zoned_to_utc",
    "zone_to_zone",
    "adjust",
    "add",
    "subtract",
    "parse_iso",
    "parse_value",
]

_LAZY_IMPORTS = {
    "CalendarValue": "time_calendar.calendar_value",
    "INVALID_DATE": "time_calendar.calendar_value",
    "create_date": "time_calendar.calendar_value",
    "date_to_instant": "time_calendar.convert",
    "instant_to_date": "time_calendar.convert",
    "zoned_to_utc": "time_calendar.zoned",
    "zone_to_zone": "time_calendar.zoned",
    "adjust": "time_calendar.arithmetic",
    "add": "time_calendar.arithmetic",
    "subtract": "time_calendar.arithmetic",
    "parse_iso": "time_calendar.parse",
    "parse_value": "time_calendar.parse",
}


def __getattr__(name: str) -> Any:
    # NOTE: We use __getattr__ for lazy imports instead of top-level imports because setuptools may evaluate
    #   this module during build (e.g., to use the value of time_calendar.__version__), before the submodules
    #   are importable. This avoids import-time errors when building from source using pyproject.toml and ensures
    #   compatibility with dynamic versioning tools like autosemver.
    #
    #   This 'lazy loading' also avoids importing Polars for callers that never use the series bridge.
    if name in _LAZY_IMPORTS:
        import importlib  # noqa: PLC0415

        return getattr(importlib.import_module(_LAZY_IMPORTS[name]), name)

    raise AttributeError(f"module {__name__} has no attribute {name}")
