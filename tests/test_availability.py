from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

import pytest

from app.domain.availability import (
    Slot,
    SlotStatus,
    VenueSchedule,
    annotate_slots,
    build_slots,
    filter_available,
    iter_slots,
    opening_window,
    overlaps,
)
from app.domain.opening_hours import OpeningHours, resolve_timezone

DAY = date(2026, 11, 2)  # Monday
DHAKA = resolve_timezone("UTC+06:00")


@dataclass
class FakeBooking:
    start_at: datetime
    end_at: datetime
    status: str


def schedule(open_: str = "10:00", close: str = "22:00", closed: bool = False, minutes: int = 60, tz=DHAKA):
    hours = OpeningHours.from_dict({"MON": {"open": open_, "close": close, "closed": closed}})
    return VenueSchedule(opening_hours=hours, slot_duration_minutes=minutes, tz=tz)


def at(hour: int, minute: int = 0, day: date = DAY) -> datetime:
    """UTC instant of a local UTC+06:00 wall-clock time."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=DHAKA).astimezone(UTC)


def test_slot_count_for_regular_day():
    slots = build_slots(schedule(), DAY)

    assert len(slots) == 12
    assert slots[0].start == at(10)
    assert slots[-1].end == at(22)
    assert all(s.end - s.start == timedelta(minutes=60) for s in slots)
    assert all(a.end == b.start for a, b in zip(slots, slots[1:]))


def test_closed_day_has_no_slots():
    assert build_slots(schedule(closed=True), DAY) == []


def test_day_without_rule_has_no_slots():
    tuesday = DAY + timedelta(days=1)

    assert build_slots(schedule(), tuesday) == []


def test_overnight_window_rolls_into_next_day():
    slots = build_slots(schedule(open_="22:00", close="02:00"), DAY)

    assert len(slots) == 4
    assert slots[0].start == at(22)
    assert slots[-1].end == at(2, day=DAY + timedelta(days=1))


def test_trailing_remainder_is_dropped():
    slots = build_slots(schedule(open_="10:00", close="12:30", minutes=60), DAY)

    assert [s.start for s in slots] == [at(10), at(11)]
    assert slots[-1].end == at(12)


def test_duration_longer_than_window_yields_nothing():
    assert build_slots(schedule(open_="10:00", close="11:00", minutes=90), DAY) == []


def test_open_equal_close_is_a_full_day():
    slots = build_slots(schedule(open_="06:00", close="06:00", minutes=60), DAY)

    assert len(slots) == 24
    assert slots[-1].end == at(6, day=DAY + timedelta(days=1))


def test_weekday_is_taken_in_local_zone():
    # Monday 00:30 in UTC+06:00 is still Sunday in UTC
    slots = build_slots(schedule(open_="00:00", close="02:00"), DAY)

    assert slots[0].start == datetime(2026, 11, 1, 18, 0, tzinfo=UTC)


def test_iana_zone_schedule():
    sched = schedule(tz=resolve_timezone("Asia/Dhaka"))

    assert build_slots(sched, DAY)[0].start == at(10)


def test_slot_builder_is_restartable():
    sched = schedule(minutes=45)

    assert build_slots(sched, DAY) == build_slots(sched, DAY)
    assert list(iter_slots(sched, DAY)) == build_slots(sched, DAY)


def test_non_positive_duration_rejected():
    with pytest.raises(ValueError):
        schedule(minutes=0)


def test_opening_window_closed_is_none():
    assert opening_window(schedule(closed=True), DAY) is None


def test_filter_removes_overlapping_slot():
    slots = [Slot(at(10), at(11)), Slot(at(11), at(12)), Slot(at(12), at(13))]
    bookings = [FakeBooking(at(11), at(12), "CONFIRMED")]

    assert filter_available(slots, bookings) == [slots[0], slots[2]]


@pytest.mark.parametrize("status", ["REJECTED", "CANCELLED"])
def test_non_blocking_statuses_pass_through(status):
    slots = [Slot(at(10), at(11)), Slot(at(11), at(12))]
    bookings = [FakeBooking(at(11), at(12), status)]

    assert filter_available(slots, bookings) == slots


def test_touching_endpoints_do_not_overlap():
    slots = [Slot(at(11), at(12))]
    bookings = [FakeBooking(at(10), at(11), "CONFIRMED")]

    assert filter_available(slots, bookings) == slots
    assert overlaps(at(10), at(11), at(11), at(12)) is False


def test_partial_overlap_blocks_every_touched_slot():
    slots = build_slots(schedule(), DAY)
    bookings = [FakeBooking(at(10, 30), at(11, 30), "PENDING")]

    available = filter_available(slots, bookings)

    assert len(available) == 10
    assert Slot(at(10), at(11)) not in available
    assert Slot(at(11), at(12)) not in available


def test_filter_without_bookings_returns_full_sequence():
    slots = build_slots(schedule(), DAY)

    assert filter_available(slots, []) == slots


def test_filter_reads_naive_storage_values_as_utc():
    slots = [Slot(at(11), at(12))]
    naive = FakeBooking(at(11).replace(tzinfo=None), at(12).replace(tzinfo=None), "PENDING")

    assert filter_available(slots, [naive]) == []


def test_annotate_slots_reports_blocking_status():
    slots = [Slot(at(10), at(11)), Slot(at(11), at(12)), Slot(at(12), at(13))]
    bookings = [
        FakeBooking(at(10), at(11), "PENDING"),
        FakeBooking(at(11), at(12), "CONFIRMED"),
        FakeBooking(at(12), at(13), "REJECTED"),
    ]

    statuses = [s.status for s in annotate_slots(slots, bookings)]

    assert statuses == [SlotStatus.PENDING, SlotStatus.CONFIRMED, SlotStatus.AVAILABLE]


def test_confirmed_wins_over_pending_in_annotation():
    slots = [Slot(at(10), at(12))]
    bookings = [
        FakeBooking(at(10), at(11), "PENDING"),
        FakeBooking(at(11), at(12), "CONFIRMED"),
    ]

    assert annotate_slots(slots, bookings)[0].status is SlotStatus.CONFIRMED
