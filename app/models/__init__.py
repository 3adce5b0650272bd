"""Database models."""

from app.models.booking import Booking
from app.models.user import User
from app.models.venue import Venue

__all__ = [
    "User",
    "Venue",
    "Booking",
]
