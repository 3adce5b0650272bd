"""Booking creation and decision service."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import (
    AuthorizationError,
    InvalidBookingStatus,
    NotFoundError,
    SlotNotAvailable,
    ValidationError,
)
from app.core.permissions import Permission, has_permission
from app.domain.availability import ensure_utc
from app.domain.booking_state import (
    BLOCKING_STATUS_VALUES,
    BookingStatus,
    assert_booking_transition,
)
from app.models.booking import BLOCKING_START_INDEX, NO_OVERLAP_CONSTRAINT, Booking
from app.models.user import User
from app.models.venue import Venue
from app.utils.booking_number import generate_booking_number
from app.utils.validators import normalize_phone, validate_phone

logger = logging.getLogger(__name__)

# SQLite names the columns rather than the partial index
_SQLITE_BLOCKING_START = "bookings.venue_id, bookings.start_at"


def is_overlap_violation(error: IntegrityError) -> bool:
    """True if the storage rejected a second blocking booking on a venue."""
    orig = getattr(error, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) or ""
    if constraint_name:
        return constraint_name in (BLOCKING_START_INDEX, NO_OVERLAP_CONSTRAINT)

    text = str(orig)
    return any(
        marker in text
        for marker in (BLOCKING_START_INDEX, NO_OVERLAP_CONSTRAINT, _SQLITE_BLOCKING_START)
    )


class BookingService:
    """Service for the booking request lifecycle.

    Creation and confirmation lock the venue row before checking for
    overlaps, so concurrent writers for the same venue are serialized by
    the database. Status changes are conditional updates on the status
    read at the start of the decision.
    """

    async def _lock_venue(self, db: AsyncSession, venue_id: UUID) -> Venue | None:
        result = await db.execute(
            select(Venue).where(Venue.id == venue_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def _find_overlap(
        self,
        db: AsyncSession,
        venue_id: UUID,
        start: datetime,
        end: datetime,
        statuses: tuple[str, ...] = BLOCKING_STATUS_VALUES,
        exclude_booking_id: UUID | None = None,
    ) -> Booking | None:
        query = select(Booking).where(
            Booking.venue_id == venue_id,
            Booking.status.in_(statuses),
            Booking.start_at < end,
            Booking.end_at > start,
        )
        if exclude_booking_id is not None:
            query = query.where(Booking.id != exclude_booking_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def create_booking(
        self,
        db: AsyncSession,
        venue_id: UUID,
        start: datetime,
        end: datetime,
        requester: User | None = None,
        guest_name: str | None = None,
        guest_phone: str | None = None,
        note: str | None = None,
    ) -> Booking:
        """Create a PENDING booking for ``[start, end)``.

        Raises:
            ValidationError: Bad range or missing/invalid guest identity.
            NotFoundError: Venue missing or not ACTIVE.
            SlotNotAvailable: Range overlaps a pending or confirmed booking.
        """
        if start.tzinfo is None or end.tzinfo is None:
            raise ValidationError("start and end must include a UTC offset")
        start, end = ensure_utc(start), ensure_utc(end)
        if end <= start:
            raise ValidationError("Invalid time range")

        user_snapshot = None
        if requester is None:
            if not guest_name or not guest_name.strip():
                raise ValidationError("guest_name is required")
            if not guest_phone or not validate_phone(guest_phone):
                raise ValidationError("Valid guest_phone is required")
            guest_name = guest_name.strip()
            guest_phone = normalize_phone(guest_phone)
        else:
            user_snapshot = requester.contact_snapshot()
            guest_name = guest_phone = None

        venue = await self._lock_venue(db, venue_id)
        if not venue or not venue.is_active:
            raise NotFoundError("Venue", str(venue_id))

        conflict = await self._find_overlap(db, venue.id, start, end)
        if conflict:
            logger.info(
                f"Booking request on venue {venue.id} for {start.isoformat()} "
                f"conflicts with booking {conflict.id}"
            )
            raise SlotNotAvailable()

        booking = Booking(
            booking_number=await generate_booking_number(db),
            venue_id=venue.id,
            owner_id=venue.owner_id,
            user_id=requester.id if requester else None,
            guest_name=guest_name,
            guest_phone=guest_phone,
            user_snapshot=user_snapshot,
            start_at=start,
            end_at=end,
            note=(note or "").strip() or None,
            status=BookingStatus.PENDING.value,
        )

        db.add(booking)
        try:
            await db.flush()
        except IntegrityError as e:
            if not is_overlap_violation(e):
                raise
            logger.warning(f"Concurrent booking rejected by storage on venue {venue_id}: {e.orig}")
            raise SlotNotAvailable()

        logger.info(
            f"Booking {booking.booking_number} ({booking.id}) requested on venue {venue.id} "
            f"for {start.isoformat()} - {end.isoformat()}"
        )
        return booking

    async def get_booking(self, db: AsyncSession, booking_id: UUID) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking", str(booking_id))
        return booking

    async def decide(
        self,
        db: AsyncSession,
        booking_id: UUID,
        target: BookingStatus | str,
        actor: User,
        note: str | None = None,
        as_admin: bool = False,
    ) -> Booking:
        """Move a booking to ``target`` on behalf of its venue owner or an admin.

        ``as_admin`` records the note as an admin note and admits the
        admin-only cancellation of a confirmed booking.

        Raises:
            NotFoundError: Booking does not exist.
            AuthorizationError: Actor is neither the venue owner nor an admin.
            InvalidBookingStatus: Transition not permitted from the current status.
            SlotNotAvailable: Confirming would overlap another confirmed booking.
        """
        target = BookingStatus(target)
        is_admin = has_permission(actor.role, Permission.OVERRIDE_BOOKING)
        if as_admin and not is_admin:
            raise AuthorizationError("Admin access required")

        booking = await self.get_booking(db, booking_id)
        if not is_admin and booking.owner_id != actor.id:
            raise AuthorizationError("You can only decide bookings for your own venues")

        current = BookingStatus(booking.status)
        assert_booking_transition(current, target, override=as_admin)

        if target is BookingStatus.CONFIRMED:
            await self._lock_venue(db, booking.venue_id)
            # Other PENDING requests compete; only a confirmed overlap blocks
            conflict = await self._find_overlap(
                db,
                booking.venue_id,
                ensure_utc(booking.start_at),
                ensure_utc(booking.end_at),
                statuses=(BookingStatus.CONFIRMED.value,),
                exclude_booking_id=booking.id,
            )
            if conflict:
                logger.info(
                    f"Confirmation of booking {booking.id} blocked by confirmed booking {conflict.id}"
                )
                raise SlotNotAvailable("Conflict: slot already booked")

        now = datetime.now(UTC)
        values: dict = {
            "status": target.value,
            "decided_by_id": actor.id,
            "decided_at": now,
            "updated_at": now,
        }
        if as_admin:
            values["admin_note"] = note
        else:
            values["owner_note"] = note
            values["owner_decision"] = target.value

        try:
            result = await db.execute(
                update(Booking)
                .where(Booking.id == booking.id, Booking.status == current.value)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as e:
            if not is_overlap_violation(e):
                raise
            logger.warning(f"Confirmation of booking {booking_id} rejected by storage: {e.orig}")
            raise SlotNotAvailable("Conflict: slot already booked")

        if result.rowcount != 1:
            logger.info(f"Booking {booking.id} changed status concurrently; decision dropped")
            raise InvalidBookingStatus()

        await db.refresh(booking)
        logger.info(
            f"Booking {booking.id} {current.value} -> {target.value} by {actor.role} {actor.id}"
        )
        return booking

    async def list_for_user(self, db: AsyncSession, user: User) -> list[Booking]:
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.venue))
            .where(Booking.user_id == user.id)
            .order_by(Booking.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_owner(
        self,
        db: AsyncSession,
        actor: User,
        status: str | None = None,
    ) -> list[Booking]:
        """Bookings on the actor's venues (every venue for an admin), newest first."""
        query = select(Booking)
        if not has_permission(actor.role, Permission.VIEW_ALL_BOOKINGS):
            query = query.where(Booking.owner_id == actor.id)
        if status:
            query = query.where(Booking.status == status)
        result = await db.execute(
            query.order_by(Booking.created_at.desc()).limit(settings.owner_list_limit)
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession, status: str | None = None) -> list[Booking]:
        query = select(Booking)
        if status:
            query = query.where(Booking.status == status)
        result = await db.execute(
            query.order_by(Booking.created_at.desc()).limit(settings.admin_list_limit)
        )
        return list(result.scalars().all())

    async def pending_count(self, db: AsyncSession, actor: User) -> int:
        query = select(func.count()).select_from(Booking).where(
            Booking.status == BookingStatus.PENDING.value
        )
        if not has_permission(actor.role, Permission.VIEW_ALL_BOOKINGS):
            query = query.where(Booking.owner_id == actor.id)
        result = await db.execute(query)
        return result.scalar_one()


booking_service = BookingService()
