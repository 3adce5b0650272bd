"""Venue database model."""

from __future__ import annotations

import uuid
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Any

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.domain.availability import VenueSchedule
from app.domain.opening_hours import OpeningHours, resolve_timezone
from app.models.types import JSONDocument, StringArrayType, UTCDateTime, utcnow

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.user import User


class Venue(Base):
    """Bookable space (turf, event hall) listed by an owner."""

    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("type IN ('TURF', 'EVENT_SPACE')", name="ck_venues_type"),
        CheckConstraint("status IN ('ACTIVE', 'SUSPENDED')", name="ck_venues_status"),
        CheckConstraint("slot_duration_minutes > 0", name="ck_venues_slot_duration"),
        Index("ix_venues_owner_created", "owner_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Basic Info
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # TURF, EVENT_SPACE
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    slug: Mapped[str] = mapped_column(String(80), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)

    # Location
    city: Mapped[str | None] = mapped_column(String(80))
    area: Mapped[str | None] = mapped_column(String(80))
    address: Mapped[str | None] = mapped_column(String(180))

    # Media (URLs only)
    thumbnail_url: Mapped[str | None] = mapped_column(Text)
    images: Mapped[list[str]] = mapped_column(StringArrayType, default=list)

    # Scheduling
    slot_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    opening_hours: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False, default=dict)
    timezone: Mapped[str | None] = mapped_column(String(64))  # None -> settings.local_timezone

    # Status
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE", index=True
    )  # ACTIVE, SUSPENDED

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="venues")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="venue")

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"

    def zone(self, default: str) -> tzinfo:
        return resolve_timezone(self.timezone or default)

    def schedule(self, default_timezone: str) -> VenueSchedule:
        """Slot-builder view of this venue's configuration."""
        return VenueSchedule(
            opening_hours=OpeningHours.from_dict(self.opening_hours),
            slot_duration_minutes=self.slot_duration_minutes,
            tz=self.zone(default_timezone),
        )
