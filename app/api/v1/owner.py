"""Owner dashboard endpoints: venue configuration and booking decisions."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_owner, get_db, require_booking_decider
from app.models.booking import Booking
from app.models.user import User
from app.models.venue import Venue
from app.schemas.booking import (
    BookingDecisionRequest,
    BookingResponse,
    BookingStatusResponse,
    OwnerBookingsResponse,
    PendingCountResponse,
)
from app.schemas.venue import VenueCreate, VenueCreatedResponse, VenueResponse, VenueSummary, VenueUpdate
from app.services.booking_service import booking_service
from app.services.venue_service import venue_service

router = APIRouter()


# ============ VENUES ============


@router.post("/venues", response_model=VenueCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    venue_data: VenueCreate,
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VenueCreatedResponse:
    """Create a venue owned by the current user."""
    venue = await venue_service.create_venue(db, current_user, venue_data)
    return VenueCreatedResponse(id=venue.id, slug=venue.slug)


@router.get("/venues", response_model=list[VenueSummary])
async def list_my_venues(
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Venue]:
    """Owner's venues (every venue for an admin), newest first."""
    return await venue_service.list_managed(db, current_user)


@router.get("/venues/{venue_id}", response_model=VenueResponse)
async def get_my_venue(
    venue_id: UUID,
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    return await venue_service.get_managed_venue(db, venue_id, current_user)


@router.patch("/venues/{venue_id}", response_model=VenueResponse)
async def update_my_venue(
    venue_id: UUID,
    venue_data: VenueUpdate,
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Update venue fields; omitted fields are left unchanged."""
    venue = await venue_service.get_managed_venue(db, venue_id, current_user)
    return await venue_service.update_venue(db, venue, venue_data)


# ============ BOOKINGS ============


@router.get("/bookings", response_model=OwnerBookingsResponse)
async def list_owner_bookings(
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: Annotated[
        str | None,
        Query(alias="status", pattern="^(PENDING|CONFIRMED|REJECTED|CANCELLED)$"),
    ] = None,
) -> OwnerBookingsResponse:
    """Bookings across the owner's venues, plus the venues themselves."""
    venues = await venue_service.list_managed(db, current_user)
    bookings = await booking_service.list_for_owner(db, current_user, status=status_filter)
    return OwnerBookingsResponse(
        venues=[VenueSummary.model_validate(v) for v in venues],
        bookings=[BookingResponse.model_validate(b) for b in bookings],
    )


@router.get("/bookings/pending-count", response_model=PendingCountResponse)
async def pending_count(
    current_user: Annotated[User, Depends(get_current_owner)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PendingCountResponse:
    return PendingCountResponse(pending=await booking_service.pending_count(db, current_user))


@router.patch("/bookings/{booking_id}/decision", response_model=BookingStatusResponse)
async def decide_booking(
    booking_id: UUID,
    decision: BookingDecisionRequest,
    current_user: Annotated[User, Depends(require_booking_decider)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingStatusResponse:
    """Confirm, reject or cancel a PENDING booking on one of the owner's venues."""
    booking: Booking = await booking_service.decide(
        db,
        booking_id,
        decision.status,
        actor=current_user,
        note=decision.owner_note,
    )
    return BookingStatusResponse(id=booking.id, status=booking.status)
