"""Pydantic schemas for API validation."""

from app.schemas.booking import (
    AdminStatusRequest,
    BookingCreate,
    BookingCreatedResponse,
    BookingDecisionRequest,
    BookingResponse,
    MyBookingResponse,
    OwnerBookingsResponse,
    PendingCountResponse,
)
from app.schemas.user import (
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.schemas.venue import (
    AvailabilityResponse,
    AvailabilitySlot,
    VenueCreate,
    VenueCreatedResponse,
    VenueResponse,
    VenueStatusUpdate,
    VenueSummary,
    VenueUpdate,
)

__all__ = [
    # User
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "TokenResponse",
    "RefreshTokenRequest",
    # Venue
    "VenueCreate",
    "VenueUpdate",
    "VenueStatusUpdate",
    "VenueSummary",
    "VenueResponse",
    "VenueCreatedResponse",
    "AvailabilitySlot",
    "AvailabilityResponse",
    # Booking
    "BookingCreate",
    "BookingDecisionRequest",
    "AdminStatusRequest",
    "BookingResponse",
    "BookingCreatedResponse",
    "MyBookingResponse",
    "OwnerBookingsResponse",
    "PendingCountResponse",
]
