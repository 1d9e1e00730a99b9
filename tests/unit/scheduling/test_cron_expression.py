from datetime import datetime, timedelta

import pytest

from conduit.scheduling import (
    CalendarSchedule,
    CronExpression,
    IntervalSchedule,
    InvalidScheduleError,
    ScheduleUnresolvableError,
    cron,
    parse_schedule,
)

# Monday
NOW = datetime(2024, 1, 1, 10, 30, 15)


def test_parse_fields():
    expr = CronExpression.parse("*/15 0-6/2 1,15 * 1-5")
    assert expr.minutes == {0, 15, 30, 45}
    assert expr.hours == {0, 2, 4, 6}
    assert expr.days == {1, 15}
    assert expr.months == set(range(1, 13))
    assert expr.weekdays == {1, 2, 3, 4, 5}


def test_step_from_start_value():
    assert CronExpression.parse("50/5 * * * *").minutes == {50, 55}


def test_seven_is_sunday():
    assert CronExpression.parse("0 0 * * 7").weekdays == {0}
    assert CronExpression.parse("0 0 * * 5-7").weekdays == {0, 5, 6}


@pytest.mark.parametrize(
    "expression",
    [
        "* * * *",
        "* * * * * *",
        "60 * * * *",
        "* 24 * * *",
        "* * 0 * *",
        "* * * 13 *",
        "* * * * 8",
        "*/0 * * * *",
        "a * * * *",
        "5-1 * * * *",
        "1,,2 * * * *",
    ],
)
def test_invalid_expressions(expression):
    with pytest.raises(InvalidScheduleError) as exc:
        CronExpression.parse(expression)
    assert exc.value.code == "SCHEDULE_INVALID"


def test_top_of_every_hour():
    assert CronExpression.parse("0 * * * *").next_after(NOW) == datetime(2024, 1, 1, 11, 0)


def test_every_quarter_hour():
    assert CronExpression.parse("*/15 * * * *").next_after(NOW) == datetime(2024, 1, 1, 10, 45)


def test_next_is_strictly_after_now():
    on_the_mark = datetime(2024, 1, 1, 10, 45)
    assert CronExpression.parse("*/15 * * * *").next_after(on_the_mark) == datetime(2024, 1, 1, 11, 0)


def test_weekdays_skip_the_weekend():
    friday_evening = datetime(2024, 1, 5, 18, 0)
    expr = CronExpression.parse("0 9 * * 1-5")
    assert expr.next_after(friday_evening) == datetime(2024, 1, 8, 9, 0)


def test_day_of_month_and_weekday_must_both_match():
    # first Friday the 13th of 2024
    expr = CronExpression.parse("0 0 13 * 5")
    assert expr.next_after(NOW) == datetime(2024, 9, 13, 0, 0)


def test_rolls_over_the_year():
    expr = CronExpression.parse("0 0 1 1 *")
    assert expr.next_after(datetime(2024, 12, 31, 23, 59, 30)) == datetime(2025, 1, 1, 0, 0)


def test_matches():
    expr = CronExpression.parse("30 10 * * 1")
    assert expr.matches(datetime(2024, 1, 1, 10, 30))
    assert not expr.matches(datetime(2024, 1, 2, 10, 30))


def test_impossible_day_is_unresolvable():
    with pytest.raises(ScheduleUnresolvableError) as exc:
        CronExpression.parse("0 0 31 2 *").next_after(NOW)
    assert exc.value.code == "SCHEDULE_UNRESOLVABLE"
    assert "0 0 31 2 *" in exc.value.message


def test_horizon_bounds_the_search():
    expr = CronExpression.parse("0 0 1 1 *")
    with pytest.raises(ScheduleUnresolvableError):
        expr.next_after(NOW, horizon_minutes=60 * 24 * 30)


def test_parse_schedule_values():
    assert parse_schedule(1500) == IntervalSchedule(interval_ms=1500)
    assert parse_schedule(timedelta(seconds=2)).interval_ms == 2000
    assert parse_schedule(0.5).seconds == 0.0005
    calendar = parse_schedule("*/5  * * * *")
    assert isinstance(calendar, CalendarSchedule)
    assert calendar.cron.minutes == set(range(0, 60, 5))


@pytest.mark.parametrize("value", [0, -5, True, timedelta(0), None, "nope", [1]])
def test_parse_schedule_rejects(value):
    with pytest.raises(InvalidScheduleError):
        parse_schedule(value)


def test_cron_decorator_validates_eagerly():
    with pytest.raises(InvalidScheduleError):
        cron("61 * * * *")
