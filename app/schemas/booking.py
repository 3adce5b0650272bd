"""Booking-related Pydantic schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.venue import VenueSummary
from app.utils.validators import normalize_phone, validate_phone


class BookingCreate(BaseModel):
    """Schema for requesting a booking.

    Signed-in users may omit the guest fields; anonymous requests must
    carry both ``guest_name`` and ``guest_phone``.
    """

    venue_id: UUID
    start: AwareDatetime
    end: AwareDatetime
    note: str | None = Field(None, max_length=500)
    guest_name: str | None = Field(None, min_length=2, max_length=100)
    guest_phone: str | None = None

    @field_validator("guest_name", "note")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("guest_phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not validate_phone(v):
            raise ValueError("Invalid phone number")
        return normalize_phone(v)

    @model_validator(mode="after")
    def end_after_start(self) -> "BookingCreate":
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self


class BookingDecisionRequest(BaseModel):
    """Owner decision on a pending booking."""

    status: str = Field(..., pattern="^(CONFIRMED|REJECTED|CANCELLED)$")
    owner_note: str | None = Field(None, max_length=500)


class AdminStatusRequest(BaseModel):
    """Admin status change; may also cancel a confirmed booking."""

    status: str = Field(..., pattern="^(CONFIRMED|REJECTED|CANCELLED)$")
    admin_note: str | None = Field(None, max_length=500)


class GuestInfo(BaseModel):
    name: str
    phone: str


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_number: str
    venue_id: UUID
    owner_id: UUID
    user_id: UUID | None
    guest: GuestInfo | None
    user_snapshot: dict[str, Any] | None

    # Interval
    start_at: datetime
    end_at: datetime
    note: str | None

    # Status
    status: str
    owner_decision: str | None
    owner_note: str | None
    admin_note: str | None
    decided_by_id: UUID | None
    decided_at: datetime | None

    # Timestamps
    created_at: datetime
    updated_at: datetime


class BookingCreatedResponse(BaseModel):
    id: UUID
    booking_number: str
    status: str


class VenueRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str


class MyBookingResponse(BookingResponse):
    """Requester's view of a booking, with the venue it targets."""

    venue: VenueRef


class OwnerBookingsResponse(BaseModel):
    """Owner dashboard: their venues and the bookings across them."""

    venues: list[VenueSummary]
    bookings: list[BookingResponse]


class PendingCountResponse(BaseModel):
    pending: int


class BookingStatusResponse(BaseModel):
    id: UUID
    status: str
