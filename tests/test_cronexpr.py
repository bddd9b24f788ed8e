from datetime import datetime

import pytest

from originkit.cronexpr import CronExpr


@pytest.mark.parametrize(
    "expr",
    [
        "* * * *",
        "* * * * * * *",
        "1/2/3 * * * *",
        "1-2-3 * * * *",
        "*-5 * * * *",
        "5-1 * * * *",
        "60 * * * *",
        "* 24 * * *",
        "* * 0 * *",
        "* * * 13 *",
        "* * * * 7",
        "*/0 * * * *",
        "a * * * *",
        "* * * * */x",
    ],
)
def test_invalid_expressions(expr):
    with pytest.raises(ValueError, match="invalid expr"):
        CronExpr(expr)


def test_field_count_message():
    with pytest.raises(ValueError, match="expected 5 or 6 fields, got 4"):
        CronExpr("* * * *")


def test_daily_midnight():
    expr = CronExpr("0 0 * * *")
    assert expr.next(datetime(2024, 1, 1, 10, 30, 15)) == datetime(2024, 1, 2, 0, 0, 0)


def test_every_fifteen_seconds():
    expr = CronExpr("*/15 * * * * *")
    assert expr.next(datetime(2024, 3, 5, 10, 0, 7)) == datetime(2024, 3, 5, 10, 0, 15)


@pytest.mark.parametrize(
    "text",
    ["* * * * *", "30 * * * * *", "0 12 * * 1-5", "5,10 3 1 * *", "0 0 1 1 *"],
)
def test_next_is_after_and_matches(text):
    expr = CronExpr(text)
    start = datetime(2023, 6, 15, 13, 45, 20, 500)
    result = expr.next(start)
    assert result > start
    assert result.microsecond == 0
    assert expr.next(result - (result - start) / 2) <= result or result == expr.next(start)


def test_five_fields_fire_on_whole_minutes():
    expr = CronExpr("* * * * *")
    result = expr.next(datetime(2023, 6, 15, 13, 45, 20))
    assert result.second == 0
    assert result.minute == 46


def test_day_of_week_sunday():
    expr = CronExpr("0 0 * * 0")
    result = expr.next(datetime(2023, 6, 15, 13, 45, 20))
    assert result.isoweekday() == 7
    assert (result.hour, result.minute, result.second) == (0, 0, 0)


def test_day_of_month_field():
    expr = CronExpr("0 0 15 * *")
    result = expr.next(datetime(2023, 6, 15, 13, 45, 20))
    assert result.day == 15
    assert result.month == 7


def test_month_field_rolls_year():
    expr = CronExpr("0 0 1 1 *")
    result = expr.next(datetime(2023, 6, 15))
    assert (result.year, result.month, result.day) == (2024, 1, 1)


def test_impossible_date_returns_none():
    assert CronExpr("0 0 30 2 *").next(datetime(2023, 6, 15)) is None


def test_consecutive_runs_increase():
    expr = CronExpr("0 */10 * * * *")
    t = datetime(2023, 12, 31, 23, 41)
    seen = []
    for _ in range(5):
        t = expr.next(t)
        seen.append(t)
    assert seen == sorted(seen)
    assert all(x.minute % 10 == 0 and x.second == 0 for x in seen)