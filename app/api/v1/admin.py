"""Admin panel endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_db, require_booking_override
from app.models.booking import Booking
from app.models.user import User
from app.models.venue import Venue
from app.schemas.booking import AdminStatusRequest, BookingResponse, BookingStatusResponse
from app.schemas.venue import VenueStatusUpdate, VenueSummary
from app.services.booking_service import booking_service
from app.services.venue_service import venue_service

router = APIRouter()


# ============ VENUES ============


@router.get("/venues", response_model=list[VenueSummary])
async def list_all_venues(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Venue]:
    """All venues regardless of status, newest first."""
    return await venue_service.list_all(db)


@router.patch("/venues/{venue_id}/status", response_model=VenueSummary)
async def set_venue_status(
    venue_id: UUID,
    request: VenueStatusUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Venue:
    """Suspend or reactivate a venue."""
    return await venue_service.set_status(db, venue_id, request.status, admin)


# ============ BOOKINGS ============


@router.get("/bookings", response_model=list[BookingResponse])
async def list_all_bookings(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: Annotated[
        str | None,
        Query(alias="status", pattern="^(PENDING|CONFIRMED|REJECTED|CANCELLED)$"),
    ] = None,
) -> list[Booking]:
    return await booking_service.list_all(db, status=status_filter)


@router.patch("/bookings/{booking_id}/status", response_model=BookingStatusResponse)
async def set_booking_status(
    booking_id: UUID,
    request: AdminStatusRequest,
    admin: Annotated[User, Depends(require_booking_override)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingStatusResponse:
    """Decide any venue's booking; may also cancel a confirmed booking."""
    booking = await booking_service.decide(
        db,
        booking_id,
        request.status,
        actor=admin,
        note=request.admin_note,
        as_admin=True,
    )
    return BookingStatusResponse(id=booking.id, status=booking.status)
