from datetime import date, time

import pytest

from conftest import hm
from studio_slots.core.errors import InvalidArgument, InvalidDate
from studio_slots.services.intervals import (
    add_minutes,
    day_of_week,
    format_hhmm,
    overlaps,
    parse_hhmm,
    parse_iso_date,
)


def test_day_of_week_sunday_is_zero():
    assert day_of_week(date(2026, 10, 18)) == 0
    assert day_of_week(date(2026, 10, 21)) == 3
    assert day_of_week(date(2026, 10, 24)) == 6


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (("10:00", "12:30"), ("11:00", "11:45"), True),
        (("10:00", "12:30"), ("12:30", "13:00"), False),
        (("12:30", "13:00"), ("10:00", "12:30"), False),
        (("10:00", "12:30"), ("09:00", "10:01"), True),
        (("10:00", "12:30"), ("08:00", "18:00"), True),
        (("10:00", "12:30"), ("13:30", "15:00"), False),
    ],
)
def test_half_open_overlap(a, b, expected):
    assert overlaps(hm(a[0]), hm(a[1]), hm(b[0]), hm(b[1])) is expected
    assert overlaps(hm(b[0]), hm(b[1]), hm(a[0]), hm(a[1])) is expected


def test_add_minutes_caps_at_end_of_day():
    assert add_minutes(hm("21:00"), 90) == hm("22:30")
    assert add_minutes(hm("23:00"), 120) == time.max


def test_hhmm_helpers():
    assert parse_hhmm("09:05") == time(9, 5)
    assert format_hhmm(time(18, 30)) == "18:30"
    with pytest.raises(InvalidArgument):
        parse_hhmm("9am")


@pytest.mark.parametrize("value", ["2026-13-01", "21/10/2026", "", "2026-02-30", "tomorrow", "2026-1-5", "2026-10-21T09:00", " 2026-10-21"])
def test_parse_iso_date_rejects_malformed(value):
    with pytest.raises(InvalidDate):
        parse_iso_date(value)


def test_parse_iso_date():
    assert parse_iso_date("2026-10-21") == date(2026, 10, 21)
