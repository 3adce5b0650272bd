"""Availability queries: slots for one venue on one local day."""

import logging
import re
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.domain.availability import (
    AnnotatedSlot,
    VenueSchedule,
    annotate_slots,
    build_slots,
    opening_window,
)
from app.domain.booking_state import BLOCKING_STATUS_VALUES
from app.models.booking import Booking
from app.models.venue import Venue

logger = logging.getLogger(__name__)

CALENDAR_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_calendar_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date."""
    if not isinstance(value, str) or not CALENDAR_DATE_PATTERN.match(value):
        raise ValidationError("date must be YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("date must be YYYY-MM-DD")


class AvailabilityService:
    """Composes the slot builder and conflict filter over stored bookings."""

    async def get_active_venue(self, db: AsyncSession, venue_id: UUID) -> Venue:
        result = await db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue or not venue.is_active:
            raise NotFoundError("Venue", str(venue_id))
        return venue

    def schedule_for(self, venue: Venue) -> VenueSchedule:
        """Venue schedule, or ValidationError if its stored configuration is unusable."""
        try:
            return venue.schedule(settings.local_timezone)
        except ValueError as e:
            logger.error(f"Venue {venue.id} has invalid schedule configuration: {e}")
            raise ValidationError(f"Venue schedule is invalid: {e}")

    async def blocking_bookings_between(
        self,
        db: AsyncSession,
        venue_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Booking]:
        """Blocking bookings of a venue overlapping ``[start, end)``."""
        query = select(Booking).where(
            Booking.venue_id == venue_id,
            Booking.status.in_(BLOCKING_STATUS_VALUES),
            Booking.start_at < end,
            Booking.end_at > start,
        )
        result = await db.execute(query.order_by(Booking.start_at))
        return list(result.scalars().all())

    async def get_day_slots(
        self,
        db: AsyncSession,
        venue: Venue,
        day: date,
        only_available: bool = False,
    ) -> list[AnnotatedSlot]:
        """Annotated slots for ``day``; with ``only_available`` drops blocked ones."""
        schedule = self.schedule_for(venue)
        window = opening_window(schedule, day)
        if window is None:
            return []

        slots = build_slots(schedule, day)
        if not slots:
            return []

        bookings = await self.blocking_bookings_between(db, venue.id, *window)
        annotated = annotate_slots(slots, bookings)
        if only_available:
            return [slot for slot in annotated if slot.is_available]
        return annotated


availability_service = AvailabilityService()
