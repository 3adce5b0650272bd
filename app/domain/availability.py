"""Slot generation and booking-conflict filtering.

Everything here is pure: no I/O, no clock reads, no shared state. Instants
are timezone-aware UTC datetimes; naive datetimes coming back from storage
are read as UTC.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Protocol

from app.domain.booking_state import BookingStatus, is_blocking
from app.domain.opening_hours import OpeningHours, local_to_instant


class SlotStatus(str, Enum):
    """Display status of a generated slot."""

    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"


class BookedInterval(Protocol):
    """Anything with a booking's interval and status (ORM rows included)."""

    start_at: datetime
    end_at: datetime
    status: str


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AnnotatedSlot:
    start: datetime
    end: datetime
    status: SlotStatus

    @property
    def is_available(self) -> bool:
        return self.status is SlotStatus.AVAILABLE


@dataclass(frozen=True)
class VenueSchedule:
    """The slice of venue configuration the slot builder needs."""

    opening_hours: OpeningHours
    slot_duration_minutes: int
    tz: tzinfo

    def __post_init__(self) -> None:
        if self.slot_duration_minutes <= 0:
            raise ValueError("Slot duration must be a positive number of minutes")


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return a_start < b_end and a_end > b_start


def opening_window(schedule: VenueSchedule, day: date) -> tuple[datetime, datetime] | None:
    """UTC open/close instants for local ``day``, or None when closed.

    A close time at or before the open time rolls over to the next day.
    """
    rule = schedule.opening_hours.rule_for(day)
    if rule is None or rule.closed:
        return None

    start = local_to_instant(day, rule.open, schedule.tz)
    end = local_to_instant(day, rule.close, schedule.tz)
    if end <= start:
        end += timedelta(hours=24)
    return start, end


def iter_slots(schedule: VenueSchedule, day: date) -> Iterator[Slot]:
    """Yield consecutive fixed-length slots inside the day's opening window.

    A trailing remainder shorter than the slot duration is dropped.
    """
    window = opening_window(schedule, day)
    if window is None:
        return

    start, end = window
    duration = timedelta(minutes=schedule.slot_duration_minutes)
    cursor = start
    while cursor + duration <= end:
        yield Slot(start=cursor, end=cursor + duration)
        cursor += duration


def build_slots(schedule: VenueSchedule, day: date) -> list[Slot]:
    return list(iter_slots(schedule, day))


def blocking_bookings(bookings: Iterable[BookedInterval]) -> list[BookedInterval]:
    return [b for b in bookings if is_blocking(b.status)]


def filter_available(slots: Iterable[Slot], bookings: Iterable[BookedInterval]) -> list[Slot]:
    """Keep the slots that overlap no pending or confirmed booking, in order."""
    blocking = [
        (ensure_utc(b.start_at), ensure_utc(b.end_at)) for b in blocking_bookings(bookings)
    ]
    return [
        slot
        for slot in slots
        if not any(overlaps(slot.start, slot.end, b_start, b_end) for b_start, b_end in blocking)
    ]


def slot_status(slot: Slot, bookings: Iterable[BookedInterval]) -> SlotStatus:
    """CONFIRMED wins over PENDING when both overlap the slot."""
    status = SlotStatus.AVAILABLE
    for booking in bookings:
        if not overlaps(slot.start, slot.end, ensure_utc(booking.start_at), ensure_utc(booking.end_at)):
            continue
        booking_status = BookingStatus(booking.status)
        if booking_status is BookingStatus.CONFIRMED:
            return SlotStatus.CONFIRMED
        if booking_status is BookingStatus.PENDING:
            status = SlotStatus.PENDING
    return status


def annotate_slots(slots: Iterable[Slot], bookings: Iterable[BookedInterval]) -> list[AnnotatedSlot]:
    blocking = blocking_bookings(bookings)
    return [
        AnnotatedSlot(start=slot.start, end=slot.end, status=slot_status(slot, blocking))
        for slot in slots
    ]
