"""Tests for calendar helpers."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from utils.dates import date_key, is_last_day_of_month, next_run_at, seconds_until


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 1, 31), True),
        (date(2024, 1, 30), False),
        (date(2024, 2, 28), False),
        (date(2024, 2, 29), True),
        (date(2023, 2, 28), True),
        (date(2024, 4, 30), True),
        (date(2024, 12, 31), True),
    ],
)
def test_is_last_day_of_month(day, expected):
    assert is_last_day_of_month(day) is expected


def test_date_key_is_iso():
    assert date_key(date(2024, 3, 5)) == "2024-03-05"


def test_next_run_later_today():
    now = datetime(2024, 5, 10, 8, 30, tzinfo=timezone.utc)
    assert next_run_at(12, 0, timezone.utc, now) == datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
    assert seconds_until(12, 0, timezone.utc, now) == 3.5 * 3600


def test_next_run_rolls_over_to_tomorrow():
    now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
    assert next_run_at(12, 0, timezone.utc, now) == datetime(2024, 5, 11, 12, 0, tzinfo=timezone.utc)


def test_next_run_uses_local_wall_clock():
    kyiv = ZoneInfo("Europe/Kyiv")
    # 09:30 UTC is 12:30 in Kyiv (summer time), so 12:00 local has passed
    now = datetime(2024, 7, 1, 9, 30, tzinfo=timezone.utc)
    run = next_run_at(12, 0, kyiv, now)
    assert run.date() == date(2024, 7, 2)
    assert (run.hour, run.minute) == (12, 0)


def test_seconds_until_across_spring_forward():
    kyiv = ZoneInfo("Europe/Kyiv")
    # Clocks move from 03:00 to 04:00 on 2024-03-31, so that day is 23 hours long
    now = datetime(2024, 3, 30, 12, 0, 1, tzinfo=kyiv)

    wait = seconds_until(12, 0, kyiv, now)

    assert wait == 23 * 3600 - 1
    fired = (now.astimezone(timezone.utc) + timedelta(seconds=wait)).astimezone(kyiv)
    assert (fired.hour, fired.minute) == (12, 0)


def test_seconds_until_across_fall_back():
    kyiv = ZoneInfo("Europe/Kyiv")
    # 2024-10-27 is 25 hours long
    now = datetime(2024, 10, 26, 12, 0, tzinfo=kyiv)
    assert seconds_until(12, 0, kyiv, now) == 25 * 3600
