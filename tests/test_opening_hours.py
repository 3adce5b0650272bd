from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.domain.opening_hours import (
    DayRule,
    OpeningHours,
    Weekday,
    local_to_instant,
    parse_hhmm,
    resolve_timezone,
)


@pytest.mark.parametrize("value,expected", [("00:00", time(0, 0)), ("09:05", time(9, 5)), ("23:59", time(23, 59))])
def test_parse_hhmm_accepts_24_hour_times(value, expected):
    assert parse_hhmm(value) == expected


@pytest.mark.parametrize("value", ["24:00", "9:00", "12:60", "1200", "", "noon"])
def test_parse_hhmm_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_hhmm(value)


@pytest.mark.parametrize(
    "name,offset",
    [
        ("UTC+06:00", timedelta(hours=6)),
        ("+0600", timedelta(hours=6)),
        ("GMT-3", timedelta(hours=-3)),
        ("UTC+05:30", timedelta(hours=5, minutes=30)),
        ("UTC", timedelta(0)),
    ],
)
def test_resolve_timezone_fixed_offsets(name, offset):
    assert resolve_timezone(name).utcoffset(None) == offset


def test_resolve_timezone_iana_name():
    assert resolve_timezone("Asia/Dhaka") == ZoneInfo("Asia/Dhaka")


@pytest.mark.parametrize("name", ["Mars/Olympus", "UTC+25:00", ""])
def test_resolve_timezone_rejects_unknown(name):
    with pytest.raises(ValueError):
        resolve_timezone(name)


def test_weekday_from_date():
    assert Weekday.from_date(date(2026, 11, 1)) is Weekday.SUN
    assert Weekday.from_date(date(2026, 11, 2)) is Weekday.MON
    assert Weekday.from_date(date(2026, 11, 7)) is Weekday.SAT


def test_local_midnight_falls_on_previous_utc_day():
    tz = resolve_timezone("UTC+06:00")

    instant = local_to_instant(date(2026, 11, 2), time(0, 30), tz)

    assert instant == datetime(2026, 11, 1, 18, 30, tzinfo=UTC)


def test_opening_hours_from_dict_is_case_insensitive_on_weekday():
    hours = OpeningHours.from_dict({"mon": {"open": "10:00", "close": "22:00"}})

    assert hours.rule_for(date(2026, 11, 2)) == DayRule(open=time(10), close=time(22))
    assert hours.rule_for(date(2026, 11, 3)) is None


def test_opening_hours_rejects_unknown_weekday():
    with pytest.raises(ValueError, match="Unknown weekday"):
        OpeningHours.from_dict({"FUNDAY": {"open": "10:00", "close": "22:00"}})


def test_opening_hours_rejects_malformed_time():
    with pytest.raises(ValueError):
        OpeningHours.from_dict({"MON": {"open": "10am", "close": "22:00"}})


def test_closed_day_ignores_its_times():
    hours = OpeningHours.from_dict({"MON": {"open": "", "close": "", "closed": True}})

    assert hours.rule_for(date(2026, 11, 2)).closed is True


def test_opening_hours_to_dict():
    document = {"SUN": {"open": "22:00", "close": "02:00", "closed": False}}

    assert OpeningHours.from_dict(document).to_dict() == document
