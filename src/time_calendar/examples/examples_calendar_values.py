from time_calendar.examples.utils import suppress_output


def create_values() -> None:
    # [start_block_1]
    from time_calendar.calendar_value import create_date, date_from_mapping
    from time_calendar.convert import array_to_date

    # Missing fields default to their minimum
    create_date(2024, 2)  # 2024-02-01T00:00:00.000
    create_date(2024, 2, 29, 13, 45)
    date_from_mapping({"year": 2024, "month": 7, "day": 4, "hour": 9})
    array_to_date([2024, 12, 31, 23, 59, 59, 999])
    # [end_block_1]


def invalid_values() -> None:
    # [start_block_2]
    from time_calendar.calendar_value import INVALID_DATE, create_date

    # Out of range fields never raise, they give the invalid sentinel
    value = create_date(2023, 2, 29)
    value.is_valid()  # False
    value is INVALID_DATE  # True
    # [end_block_2]


def calendar_queries() -> None:
    with suppress_output():
        # [start_block_3]
        from time_calendar.calendar_value import (
            create_date,
            days_in_month,
            is_leap_year,
            quarter,
            weeks_in_week_year,
        )
        from time_calendar.convert import date_to_day_of_year

        value = create_date(2024, 3, 1)
        print(is_leap_year(value.year))  # True
        print(days_in_month(2024, 2))  # 29
        print(date_to_day_of_year(value))  # 61
        print(quarter(value))  # 1
        print(weeks_in_week_year(2015))  # 53
        # [end_block_3]


def period_boundaries() -> None:
    with suppress_output():
        # [start_block_4]
        from time_calendar.calendar_value import create_date, end_of, start_of
        from time_calendar.enums import BoundaryUnit

        value = create_date(2024, 5, 17, 10, 30)
        print(start_of(value, "month"))  # 2024-05-01T00:00:00.000
        print(end_of(value, BoundaryUnit.QUARTER))  # 2024-06-30T23:59:59.999
        # [end_block_4]


def parse_strings() -> None:
    with suppress_output():
        # [start_block_5]
        from time_calendar.parse import parse_iso

        parsed = parse_iso("2020-01-01T00:00:00+02:00")
        print(parsed.value)  # 2019-12-31T22:00:00.000 (normalised to UTC)
        print(parsed.offset)  # 7200000

        print(parse_iso("2020-01-01").value)  # 2020-01-01T00:00:00.000
        print(parse_iso("not a date").value.is_valid())  # False
        # [end_block_5]
