"""Booking request endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user, get_db, get_optional_user
from app.core.middleware import booking_limiter
from app.models.booking import Booking
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingCreatedResponse, MyBookingResponse
from app.services.booking_service import booking_service

router = APIRouter()


@router.post(
    "/",
    response_model=BookingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(booking_limiter)],
)
async def create_booking(
    booking_data: BookingCreate,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingCreatedResponse:
    """Request a time range at a venue.

    Signed-in users book under their account; anonymous requests must
    include a guest name and phone.
    """
    booking = await booking_service.create_booking(
        db,
        venue_id=booking_data.venue_id,
        start=booking_data.start,
        end=booking_data.end,
        requester=current_user,
        guest_name=booking_data.guest_name,
        guest_phone=booking_data.guest_phone,
        note=booking_data.note,
    )
    return BookingCreatedResponse(
        id=booking.id,
        booking_number=booking.booking_number,
        status=booking.status,
    )


@router.get("/me", response_model=list[MyBookingResponse])
async def list_my_bookings(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[Booking]:
    """Current user's booking requests, newest first."""
    return await booking_service.list_for_user(db, current_user)
