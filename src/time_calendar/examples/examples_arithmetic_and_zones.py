from time_calendar.examples.utils import suppress_output


def add_and_subtract() -> None:
    with suppress_output():
        # [start_block_1]
        from time_calendar.arithmetic import add, subtract
        from time_calendar.calendar_value import create_date

        # Months are calendar arithmetic: the day is clamped to the end of the shorter month
        print(add(create_date(2024, 1, 31), {"month": 1}))  # 2024-02-29T00:00:00.000

        # Days and smaller units are added on the linear timeline
        print(subtract(create_date(2024, 3, 1), {"day": 1}))  # 2024-02-29T00:00:00.000

        # Calendar units are always applied before the fixed-length units
        print(add(create_date(2024, 1, 30), {"month": 1, "day": 1}))  # 2024-03-01T00:00:00.000
        # [end_block_1]


def convert_between_zones() -> None:
    with suppress_output():
        # [start_block_2]
        from time_calendar.calendar_value import create_date
        from time_calendar.zoned import offset_hour, zone_to_zone, zoned_to_utc

        london = create_date(2024, 7, 1, 9)
        print(offset_hour(london, "Europe/London"))  # 1.0 (British Summer Time)
        print(zoned_to_utc(london, "Europe/London"))  # 2024-07-01T08:00:00.000
        print(zone_to_zone(london, "Europe/London", "Asia/Tokyo"))  # 2024-07-01T17:00:00.000
        # [end_block_2]


def compare_values() -> None:
    with suppress_output():
        # [start_block_3]
        from time_calendar.calendar_value import create_date
        from time_calendar.compare import diff_in_hours, latest

        paris = create_date(2024, 1, 1, 12)
        new_york = create_date(2024, 1, 1, 12)
        print(diff_in_hours(paris, new_york, timezone="Europe/Paris", other_timezone="America/New_York"))  # 6

        print(latest([create_date(2023, 6, 1), create_date(2024, 1, 1), create_date(2022, 1, 1)]))
        # [end_block_3]


def series_bridge() -> None:
    with suppress_output():
        # [start_block_4]
        from time_calendar.calendar_value import create_date
        from time_calendar.series import from_series, to_series

        # Either side of the switch to summer time
        values = [create_date(2024, 3, 31, 1, 30), create_date(2024, 3, 31, 3, 30)]
        series = to_series(values, timezone="Europe/Berlin")
        print(series)
        print(from_series(series, timezone="Europe/Berlin"))
        # [end_block_4]
