import pytest

from app.core.exceptions import InvalidBookingStatus
from app.domain.booking_state import (
    BLOCKING_STATUS_VALUES,
    BLOCKING_STATUSES,
    BookingStatus,
    allowed_transitions,
    assert_booking_transition,
    is_blocking,
)
from app.models.booking import BLOCKING_STATUS_SQL

ALL = list(BookingStatus)
TERMINAL = [BookingStatus.REJECTED, BookingStatus.CANCELLED]


def test_blocking_statuses():
    assert BLOCKING_STATUSES == {BookingStatus.PENDING, BookingStatus.CONFIRMED}
    assert is_blocking("PENDING") and is_blocking("CONFIRMED")
    assert not is_blocking("REJECTED") and not is_blocking("CANCELLED")


def test_blocking_status_predicate_matches_enum():
    assert BLOCKING_STATUS_VALUES == ("CONFIRMED", "PENDING")
    assert BLOCKING_STATUS_SQL == "status IN ('CONFIRMED', 'PENDING')"


@pytest.mark.parametrize("target", ["CONFIRMED", "REJECTED", "CANCELLED"])
def test_pending_moves_to_any_decision(target):
    assert_booking_transition("PENDING", target)


def test_pending_to_pending_is_not_a_transition():
    with pytest.raises(InvalidBookingStatus):
        assert_booking_transition("PENDING", "PENDING")


@pytest.mark.parametrize("current", ["CONFIRMED", "REJECTED", "CANCELLED"])
@pytest.mark.parametrize("target", ALL)
def test_decided_bookings_cannot_move(current, target):
    with pytest.raises(InvalidBookingStatus) as exc:
        assert_booking_transition(current, target)

    assert exc.value.status_code == 409
    assert exc.value.detail == "Only PENDING bookings can be updated"


def test_admin_override_cancels_confirmed():
    assert_booking_transition("CONFIRMED", "CANCELLED", override=True)


@pytest.mark.parametrize("target", ["PENDING", "CONFIRMED", "REJECTED"])
def test_admin_override_is_limited_to_cancellation(target):
    with pytest.raises(InvalidBookingStatus, match="Invalid booking transition"):
        assert_booking_transition("CONFIRMED", target, override=True)


@pytest.mark.parametrize("current", TERMINAL)
def test_terminal_states_have_no_transitions(current):
    assert allowed_transitions(current) == frozenset()
    assert allowed_transitions(current, override=True) == frozenset()


def test_every_status_has_a_transition_entry():
    for status in ALL:
        allowed_transitions(status)
        allowed_transitions(status, override=True)


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        assert_booking_transition("ARCHIVED", "CANCELLED")
