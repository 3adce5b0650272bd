"""Booking number and slug generation utilities."""

import random
import string

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.validators import slugify


async def generate_booking_number(db: AsyncSession) -> str:
    """Generate a unique booking number in format BK-XXXXXX.

    Args:
        db: Database session for uniqueness check

    Returns:
        str: Unique booking number like 'BK-A3B7K9'
    """
    from app.models.booking import Booking

    chars = string.ascii_uppercase + string.digits
    while True:
        booking_number = "BK-" + "".join(random.choices(chars, k=6))

        result = await db.execute(
            select(Booking.id).where(Booking.booking_number == booking_number)
        )
        if result.scalar_one_or_none() is None:
            return booking_number


async def generate_slug(db: AsyncSession, name: str) -> str:
    """Generate a unique venue slug from its name.

    Args:
        db: Database session for uniqueness check
        name: Venue name

    Returns:
        str: Unique slug like 'green-field-turf' or 'green-field-turf-k9m2'
    """
    from app.models.venue import Venue

    base = slugify(name)[:70] or "venue"
    if len(base) < 3:
        base = f"{base}-venue"

    slug = base
    while True:
        result = await db.execute(select(Venue.id).where(Venue.slug == slug))
        if result.scalar_one_or_none() is None:
            return slug
        suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=4))
        slug = f"{base}-{suffix}"
