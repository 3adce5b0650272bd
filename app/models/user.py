"""User-related database models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.types import UTCDateTime, utcnow

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.venue import Venue


class User(Base):
    """User account model."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('USER', 'OWNER', 'ADMIN')", name="ck_users_role"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20))
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(10), nullable=False, default="USER"
    )  # USER, OWNER, ADMIN

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, onupdate=utcnow)
    last_login_at: Mapped[datetime | None] = mapped_column(UTCDateTime)

    # Relationships
    venues: Mapped[list["Venue"]] = relationship("Venue", back_populates="owner")
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="user", foreign_keys="[Booking.user_id]"
    )

    def contact_snapshot(self) -> dict[str, str | None]:
        """Contact details copied onto a booking at request time."""
        return {"name": self.name, "email": self.email, "phone": self.phone}
