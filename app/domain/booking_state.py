"""Booking state machine."""

from enum import Enum

from app.core.exceptions import InvalidBookingStatus


class BookingStatus(str, Enum):
    """Lifecycle states of a booking request."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


# Statuses whose interval is withheld from availability
BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
BLOCKING_STATUS_VALUES = tuple(sorted(status.value for status in BLOCKING_STATUSES))

# Statuses an owner or admin may set through a decision
DECISION_STATUSES = frozenset(
    {BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
)

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: DECISION_STATUSES,
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Admin-only moves out of an otherwise terminal state
OVERRIDE_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def is_blocking(status: BookingStatus | str) -> bool:
    return BookingStatus(status) in BLOCKING_STATUSES


def allowed_transitions(current: BookingStatus | str, override: bool = False) -> frozenset[BookingStatus]:
    current = BookingStatus(current)
    allowed = BOOKING_TRANSITIONS[current]
    if override:
        allowed = allowed | OVERRIDE_TRANSITIONS[current]
    return allowed


def assert_booking_transition(
    current: BookingStatus | str,
    target: BookingStatus | str,
    override: bool = False,
) -> None:
    """Raise InvalidBookingStatus unless current -> target is permitted.

    ``override`` additionally admits the admin-only transitions.
    """
    current = BookingStatus(current)
    target = BookingStatus(target)
    if target not in allowed_transitions(current, override=override):
        if current is not BookingStatus.PENDING and not override:
            detail = "Only PENDING bookings can be updated"
        else:
            detail = f"Invalid booking transition: {current.value} → {target.value}"
        raise InvalidBookingStatus(detail)
