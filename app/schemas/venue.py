"""Venue-related Pydantic schemas."""

from datetime import date, datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from app.config import settings
from app.domain.opening_hours import HHMM_PATTERN, Weekday, resolve_timezone
from app.utils.validators import SLUG_PATTERN


class DayRuleSchema(BaseModel):
    """Opening rule for a single weekday."""

    open: str = Field(..., pattern=HHMM_PATTERN.pattern)
    close: str = Field(..., pattern=HHMM_PATTERN.pattern)
    closed: bool = False


def _check_slot_duration(v: int) -> int:
    low, high = settings.min_slot_duration_minutes, settings.max_slot_duration_minutes
    if not low <= v <= high:
        raise ValueError(f"slot_duration_minutes must be between {low} and {high}")
    return v


def _check_timezone(v: str) -> str | None:
    if not v.strip():
        return None
    resolve_timezone(v)
    return v.strip()


def _check_slug(v: str) -> str:
    v = v.strip()
    if not 3 <= len(v) <= 80 or not SLUG_PATTERN.match(v):
        raise ValueError("slug must be 3-80 characters of a-z, 0-9 and '-'")
    return v


Slug = Annotated[str, AfterValidator(_check_slug)]
SlotDuration = Annotated[int, AfterValidator(_check_slot_duration)]
TimezoneName = Annotated[str, AfterValidator(_check_timezone)]


class VenueBase(BaseModel):
    """Fields shared by create and update."""

    description: str | None = Field(None, max_length=2000)
    city: str | None = Field(None, max_length=80)
    area: str | None = Field(None, max_length=80)
    address: str | None = Field(None, max_length=180)
    thumbnail_url: str | None = Field(None, max_length=1000)
    images: list[str] | None = Field(None, max_length=20)

    @model_validator(mode="after")
    def thumbnail_in_images(self) -> "VenueBase":
        if self.thumbnail_url and self.images is not None and self.thumbnail_url not in self.images:
            raise ValueError("images must include thumbnail_url")
        return self


class VenueCreate(VenueBase):
    """Schema for creating a venue."""

    type: str = Field(..., pattern="^(TURF|EVENT_SPACE)$")
    name: str = Field(..., min_length=2, max_length=120)
    slug: Slug | None = None
    slot_duration_minutes: SlotDuration = 60
    opening_hours: dict[Weekday, DayRuleSchema]
    timezone: TimezoneName | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class VenueUpdate(VenueBase):
    """Schema for updating a venue; omitted fields are left unchanged."""

    type: str | None = Field(None, pattern="^(TURF|EVENT_SPACE)$")
    name: str | None = Field(None, min_length=2, max_length=120)
    slug: Slug | None = None
    slot_duration_minutes: SlotDuration | None = None
    opening_hours: dict[Weekday, DayRuleSchema] | None = None
    timezone: TimezoneName | None = None


class VenueStatusUpdate(BaseModel):
    """Admin soft-status change."""

    status: str = Field(..., pattern="^(ACTIVE|SUSPENDED)$")


class VenueSummary(BaseModel):
    """Compact venue representation for lists."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    type: str
    name: str
    slug: str
    city: str | None
    area: str | None
    thumbnail_url: str | None
    status: str
    created_at: datetime


class VenueResponse(VenueSummary):
    """Full venue representation."""

    description: str | None
    address: str | None
    images: list[str]
    slot_duration_minutes: int
    opening_hours: dict[str, Any]
    timezone: str | None
    updated_at: datetime


class VenueCreatedResponse(BaseModel):
    id: UUID
    slug: str


class AvailabilitySlot(BaseModel):
    start: datetime
    end: datetime
    status: str


class AvailabilityResponse(BaseModel):
    """Slots for one venue on one local calendar day."""

    venue_id: UUID
    date: date
    timezone: str
    slot_duration_minutes: int
    slots: list[AvailabilitySlot]
