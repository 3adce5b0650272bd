"""Booking-related database models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.domain.booking_state import BLOCKING_STATUS_VALUES
from app.models.types import JSONDocument, UTCDateTime, utcnow

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.venue import Venue

BLOCKING_STATUS_SQL = "status IN ({})".format(
    ", ".join(f"'{value}'" for value in BLOCKING_STATUS_VALUES)
)

# Storage constraints that reject a second blocking booking on a venue
BLOCKING_START_INDEX = "uq_bookings_venue_blocking_start"
NO_OVERLAP_CONSTRAINT = "bookings_no_overlap_per_venue"


class Booking(Base):
    """A request for one time range at one venue."""

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_bookings_time_order"),
        CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'REJECTED', 'CANCELLED')",
            name="ck_bookings_status",
        ),
        CheckConstraint(
            "user_id IS NOT NULL OR guest_name IS NOT NULL",
            name="ck_bookings_requester",
        ),
        Index("ix_bookings_venue_span_status", "venue_id", "start_at", "end_at", "status"),
        Index("ix_bookings_user_created", "user_id", "created_at"),
        # One blocking booking per venue and slot start
        Index(
            BLOCKING_START_INDEX,
            "venue_id",
            "start_at",
            unique=True,
            postgresql_where=text(BLOCKING_STATUS_SQL),
            sqlite_where=text(BLOCKING_STATUS_SQL),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_number: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )  # BK-XXXXXX
    venue_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("venues.id"), nullable=False, index=True
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True
    )  # copied from the venue for owner queries

    # Requester: a signed-in user or a guest
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))
    guest_name: Mapped[str | None] = mapped_column(String(100))
    guest_phone: Mapped[str | None] = mapped_column(String(20))
    user_snapshot: Mapped[dict[str, Any] | None] = mapped_column(JSONDocument)

    # Interval
    start_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    # Status
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING", index=True
    )  # PENDING, CONFIRMED, REJECTED, CANCELLED

    # Decision
    owner_decision: Mapped[str | None] = mapped_column(String(20))
    owner_note: Mapped[str | None] = mapped_column(Text)
    admin_note: Mapped[str | None] = mapped_column(Text)
    decided_by_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))
    decided_at: Mapped[datetime | None] = mapped_column(UTCDateTime)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    venue: Mapped["Venue"] = relationship("Venue", back_populates="bookings")
    user: Mapped["User | None"] = relationship(
        "User", back_populates="bookings", foreign_keys=[user_id]
    )

    @property
    def guest(self) -> dict[str, str] | None:
        if self.guest_name is None:
            return None
        return {"name": self.guest_name, "phone": self.guest_phone or ""}
