"""
Unit tests for the series module
"""

from datetime import date, datetime

import polars as pl
import pytest
from polars.testing import assert_series_equal

from time_calendar.calendar_value import INVALID_DATE, CalendarValue
from time_calendar.exceptions import InvalidTimezoneError
from time_calendar.series import from_series, to_series


class TestToSeries:
    """Unit tests for the to_series function."""

    def test_utc(self) -> None:
        values = [CalendarValue(2024, 1, 1), CalendarValue(2024, 2, 29, 12, 30, 15, 250)]
        expected = pl.Series(
            "time", [datetime(2024, 1, 1), datetime(2024, 2, 29, 12, 30, 15, 250_000)], dtype=pl.Datetime("ms")
        )
        assert_series_equal(to_series(values), expected)

    def test_invalid_values_are_null(self) -> None:
        values = [CalendarValue(2024, 1, 1), INVALID_DATE, CalendarValue(2023, 2, 29)]
        expected = pl.Series("time", [datetime(2024, 1, 1), None, None], dtype=pl.Datetime("ms"))
        assert_series_equal(to_series(values), expected)

    def test_name(self) -> None:
        assert to_series([CalendarValue(2024, 1, 1)], name="observed").name == "observed"

    def test_empty(self) -> None:
        assert_series_equal(to_series([]), pl.Series("time", [], dtype=pl.Datetime("ms")))

    def test_zone_is_converted_to_utc(self) -> None:
        """Wall-clock values either side of the Berlin spring forward become UTC instants."""
        values = [CalendarValue(2024, 3, 31, 1, 30), CalendarValue(2024, 3, 31, 3, 30)]
        expected = pl.Series(
            "time", [datetime(2024, 3, 31, 0, 30), datetime(2024, 3, 31, 1, 30)], dtype=pl.Datetime("ms")
        )
        assert_series_equal(to_series(values, timezone="Europe/Berlin"), expected)

    def test_accepts_generator(self) -> None:
        values = (CalendarValue(2024, 1, day) for day in range(1, 4))
        assert to_series(values).len() == 3

    @pytest.mark.parametrize(
        "values",
        [[], [INVALID_DATE], [CalendarValue(2024, 1, 1)]],
        ids=["empty", "only invalid", "valid"],
    )
    def test_unknown_zone(self, values: list[CalendarValue]) -> None:
        """An unknown zone is reported whether or not there is a valid value to convert."""
        with pytest.raises(InvalidTimezoneError):
            to_series(values, timezone="Mars/Base")


class TestFromSeries:
    """Unit tests for the from_series function."""

    def test_naive_datetimes_are_utc(self) -> None:
        series = pl.Series("time", [datetime(2024, 1, 1, 6), datetime(2024, 7, 1, 18, 45)])
        assert from_series(series) == [CalendarValue(2024, 1, 1, 6), CalendarValue(2024, 7, 1, 18, 45)]

    def test_microseconds_are_truncated(self) -> None:
        series = pl.Series("time", [datetime(2024, 1, 1, 0, 0, 0, 123_999)], dtype=pl.Datetime("us"))
        assert from_series(series) == [CalendarValue(2024, 1, 1, 0, 0, 0, 123)]

    def test_dates(self) -> None:
        series = pl.Series("time", [date(2024, 2, 29), date(1969, 12, 31)])
        assert from_series(series) == [CalendarValue(2024, 2, 29), CalendarValue(1969, 12, 31)]

    def test_nulls_are_invalid(self) -> None:
        series = pl.Series("time", [datetime(2024, 1, 1), None])
        assert from_series(series) == [CalendarValue(2024, 1, 1), INVALID_DATE]

    def test_timezone_aware_series(self) -> None:
        """An aware Series is read as the instants it denotes."""
        series = pl.Series("time", [datetime(2024, 7, 1, 12)]).dt.replace_time_zone("Europe/London")
        assert from_series(series) == [CalendarValue(2024, 7, 1, 11)]

    def test_projected_into_zone(self) -> None:
        series = pl.Series("time", [datetime(2024, 7, 1, 20), datetime(2024, 1, 1, 0)])
        assert from_series(series, timezone="Asia/Tokyo") == [
            CalendarValue(2024, 7, 2, 5),
            CalendarValue(2024, 1, 1, 9),
        ]

    def test_projected_across_fall_back(self) -> None:
        """Both UTC instants fall on 01:30 local time when New York falls back."""
        series = pl.Series("time", [datetime(2024, 11, 3, 5, 30), datetime(2024, 11, 3, 6, 30)])
        assert from_series(series, timezone="America/New_York") == [
            CalendarValue(2024, 11, 3, 1, 30),
            CalendarValue(2024, 11, 3, 1, 30),
        ]

    def test_unknown_zone(self) -> None:
        with pytest.raises(InvalidTimezoneError):
            from_series(pl.Series("time", [None], dtype=pl.Datetime("ms")), timezone="Mars/Base")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError) as err:
            from_series(pl.Series("time", [1, 2, 3]))
        assert str(err.value) == "Series must be of type Date or Datetime. Got: 'Int64'"

    def test_round_trip(self) -> None:
        values = [CalendarValue(2024, 3, 10, 3, 30), INVALID_DATE, CalendarValue(1999, 12, 31, 23, 59, 59, 999)]
        zone = "America/New_York"
        assert from_series(to_series(values, timezone=zone), timezone=zone) == values
