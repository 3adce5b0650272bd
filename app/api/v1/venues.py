"""Public venue endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import settings
from app.models.venue import Venue
from app.schemas.venue import AvailabilityResponse, AvailabilitySlot, VenueResponse, VenueSummary
from app.services.availability_service import availability_service, parse_calendar_date
from app.services.venue_service import venue_service

router = APIRouter()


@router.get("/", response_model=list[VenueSummary])
async def list_venues(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Venue]:
    """Active venues, newest first."""
    return await venue_service.list_active(db)


@router.get("/slug/{slug}", response_model=VenueResponse)
async def get_venue_by_slug(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Public venue detail."""
    return await venue_service.get_active_by_slug(db, slug.lower())


@router.get("/{venue_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    venue_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    date: Annotated[str, Query(description="Local calendar day, YYYY-MM-DD")],
    only_available: bool = False,
) -> AvailabilityResponse:
    """Slots for one local calendar day with their booking status."""
    day = parse_calendar_date(date)
    venue = await availability_service.get_active_venue(db, venue_id)
    slots = await availability_service.get_day_slots(db, venue, day, only_available=only_available)

    return AvailabilityResponse(
        venue_id=venue.id,
        date=day,
        timezone=venue.timezone or settings.local_timezone,
        slot_duration_minutes=venue.slot_duration_minutes,
        slots=[
            AvailabilitySlot(start=slot.start, end=slot.end, status=slot.status.value)
            for slot in slots
        ],
    )
