import math
import unittest

from parameterized import parameterized

from time_calendar.arithmetic import add, subtract
from time_calendar.calendar_value import INVALID_DATE, CalendarValue
from time_calendar.compare import (
    diff_in_days,
    diff_in_hours,
    diff_in_millisec,
    diff_in_min,
    diff_in_sec,
    is_after,
    is_before,
    latest,
    oldest,
)
from time_calendar.exceptions import InvalidTimezoneError
from time_calendar.zoned import now

BASE = CalendarValue(2024, 1, 1, 12)


class TestDiffInMillisec(unittest.TestCase):
    def test_absolute_by_default(self):
        later = CalendarValue(2024, 1, 1, 12, 0, 1, 500)
        self.assertEqual(diff_in_millisec(BASE, later), 1500)
        self.assertEqual(diff_in_millisec(later, BASE), 1500)

    def test_signed(self):
        later = CalendarValue(2024, 1, 1, 12, 0, 1, 500)
        self.assertEqual(diff_in_millisec(BASE, later, signed=True), 1500)
        self.assertEqual(diff_in_millisec(later, BASE, signed=True), -1500)

    def test_same_moment(self):
        self.assertEqual(diff_in_millisec(BASE, BASE), 0)

    def test_same_wall_clock_in_different_zones(self):
        """Noon in Paris and noon in New York are six hours apart in winter."""
        result = diff_in_millisec(BASE, BASE, timezone="Europe/Paris", other_timezone="America/New_York")
        self.assertEqual(result, 6 * 3_600_000)

    def test_same_moment_in_different_zones(self):
        london = CalendarValue(2024, 7, 1, 9)
        tokyo = CalendarValue(2024, 7, 1, 17)
        self.assertEqual(diff_in_millisec(london, tokyo, "Europe/London", "Asia/Tokyo"), 0)

    def test_zone_applies_to_both_values(self):
        """23 hours pass between midnight and midnight on the day the clocks go forward."""
        result = diff_in_millisec(CalendarValue(2024, 3, 31), CalendarValue(2024, 4, 1), timezone="Europe/London")
        self.assertEqual(result, 23 * 3_600_000)

    @parameterized.expand([
        ("invalid base", INVALID_DATE, BASE),
        ("invalid other", BASE, INVALID_DATE),
        ("both invalid", INVALID_DATE, INVALID_DATE),
    ])
    def test_invalid_gives_nan(self, _, base, other):
        self.assertTrue(math.isnan(diff_in_millisec(base, other)))

    def test_invalid_zone(self):
        with self.assertRaises(InvalidTimezoneError):
            diff_in_millisec(BASE, BASE, timezone="Europe/Atlantis")


class TestDiffInUnits(unittest.TestCase):
    later = CalendarValue(2024, 1, 3, 0, 0, 0, 0)  # 1.5 days after BASE

    @parameterized.expand([
        ("seconds", diff_in_sec, 129_600),
        ("minutes", diff_in_min, 2_160),
        ("hours", diff_in_hours, 36),
        ("days", diff_in_days, 1),
    ])
    def test_truncated(self, _, func, expected):
        result = func(BASE, self.later)
        self.assertEqual(result, expected)
        self.assertIsInstance(result, int)

    def test_days_with_decimal(self):
        self.assertEqual(diff_in_days(BASE, self.later, show_decimal=True), 1.5)

    def test_hours_with_decimal(self):
        later = CalendarValue(2024, 1, 1, 13, 30)
        self.assertEqual(diff_in_hours(BASE, later, show_decimal=True), 1.5)

    def test_minutes_with_decimal(self):
        later = CalendarValue(2024, 1, 1, 12, 1, 30)
        self.assertEqual(diff_in_min(BASE, later, show_decimal=True), 1.5)

    def test_signed_days(self):
        self.assertEqual(diff_in_days(self.later, BASE, signed=True), -1)
        self.assertEqual(diff_in_days(self.later, BASE, show_decimal=True, signed=True), -1.5)

    def test_truncation_is_towards_zero(self):
        self.assertEqual(diff_in_sec(CalendarValue(2024, 1, 1, 12, 0, 1, 999), BASE, signed=True), -1)

    def test_invalid_gives_nan(self):
        self.assertTrue(math.isnan(diff_in_days(BASE, INVALID_DATE)))
        self.assertTrue(math.isnan(diff_in_sec(INVALID_DATE, BASE)))


class TestLatestOldest(unittest.TestCase):
    values = [
        CalendarValue(2024, 5, 1),
        CalendarValue(2023, 12, 31, 23, 59, 59, 999),
        INVALID_DATE,
        CalendarValue(2024, 5, 1, 0, 0, 0, 1),
    ]

    def test_latest(self):
        self.assertEqual(latest(self.values), CalendarValue(2024, 5, 1, 0, 0, 0, 1))

    def test_oldest(self):
        self.assertEqual(oldest(self.values), CalendarValue(2023, 12, 31, 23, 59, 59, 999))

    def test_ordering_follows_utc_instants(self):
        """Ordering happens on the timeline, so the later wall-clock value wins in a fixed zone."""
        values = [CalendarValue(2024, 11, 3, 0, 30), CalendarValue(2024, 11, 3, 1, 30)]
        self.assertEqual(latest(values, timezone="America/New_York"), CalendarValue(2024, 11, 3, 1, 30))

    @parameterized.expand([
        ("empty", []),
        ("all invalid", [INVALID_DATE, CalendarValue(2023, 2, 29)]),
    ])
    def test_no_valid_values(self, _, values):
        self.assertIs(latest(values), INVALID_DATE)
        self.assertIs(oldest(values), INVALID_DATE)

    def test_single_value(self):
        self.assertEqual(latest([BASE]), BASE)
        self.assertEqual(oldest([BASE]), BASE)

    @parameterized.expand([
        ("empty", []),
        ("only invalid", [INVALID_DATE]),
    ])
    def test_unknown_zone_without_valid_values(self, _, values):
        with self.assertRaises(InvalidTimezoneError):
            latest(values, timezone="Mars/Base")
        with self.assertRaises(InvalidTimezoneError):
            oldest(values, timezone="Mars/Base")


class TestIsBeforeAfter(unittest.TestCase):
    def test_past(self):
        past = subtract(now(), {"day": 1})
        self.assertTrue(is_before(past))
        self.assertFalse(is_after(past))

    def test_future(self):
        future = add(now(), {"day": 1})
        self.assertTrue(is_after(future))
        self.assertFalse(is_before(future))

    def test_zone(self):
        """Current UTC time read as Tokyo wall-clock time is nine hours in the past."""
        self.assertTrue(is_before(add(now(), {"hour": 1}), timezone="Asia/Tokyo"))

    def test_invalid(self):
        self.assertFalse(is_before(INVALID_DATE))
        self.assertFalse(is_after(INVALID_DATE))
