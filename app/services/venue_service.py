"""Venue management service."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import AuthorizationError, NotFoundError, SlugTaken
from app.core.permissions import UserRole, can_manage_venue
from app.models.user import User
from app.models.venue import Venue
from app.schemas.venue import VenueCreate, VenueUpdate
from app.utils.booking_number import generate_slug

logger = logging.getLogger(__name__)

PUBLIC_LIST_LIMIT = 60


def _opening_hours_document(rules: dict) -> dict:
    return {day.value: rule.model_dump() for day, rule in rules.items()}


class VenueService:
    """Service for owner venue configuration and public venue reads."""

    async def _slug_exists(self, db: AsyncSession, slug: str, exclude_id: UUID | None = None) -> bool:
        query = select(Venue.id).where(Venue.slug == slug)
        if exclude_id is not None:
            query = query.where(Venue.id != exclude_id)
        result = await db.execute(query)
        return result.scalar_one_or_none() is not None

    async def _flush(self, db: AsyncSession, slug: str) -> None:
        try:
            await db.flush()
        except IntegrityError:
            raise SlugTaken(slug)

    async def create_venue(self, db: AsyncSession, owner: User, data: VenueCreate) -> Venue:
        if data.slug:
            if await self._slug_exists(db, data.slug):
                raise SlugTaken(data.slug)
            slug = data.slug
        else:
            slug = await generate_slug(db, data.name)

        images = data.images or ([data.thumbnail_url] if data.thumbnail_url else [])
        venue = Venue(
            owner_id=owner.id,
            type=data.type,
            name=data.name,
            slug=slug,
            description=data.description,
            city=data.city,
            area=data.area,
            address=data.address,
            thumbnail_url=data.thumbnail_url,
            images=images,
            slot_duration_minutes=data.slot_duration_minutes,
            opening_hours=_opening_hours_document(data.opening_hours),
            timezone=data.timezone,
            status="ACTIVE",
        )
        db.add(venue)
        await self._flush(db, slug)

        logger.info(f"Venue {venue.id} ({venue.slug}) created by owner {owner.id}")
        return venue

    async def get_managed_venue(self, db: AsyncSession, venue_id: UUID, actor: User) -> Venue:
        """Venue the actor owns (any venue for an admin)."""
        result = await db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue:
            raise NotFoundError("Venue", str(venue_id))
        if not can_manage_venue(actor.role, actor.id, venue.owner_id):
            raise AuthorizationError("You can only manage your own venues")
        return venue

    async def update_venue(self, db: AsyncSession, venue: Venue, data: VenueUpdate) -> Venue:
        """Apply the fields present in ``data``; absent fields are left unchanged."""
        changes = data.model_dump(exclude_unset=True)

        if changes.get("slug") and changes["slug"] != venue.slug:
            if await self._slug_exists(db, changes["slug"], exclude_id=venue.id):
                raise SlugTaken(changes["slug"])
        elif "slug" in changes:
            changes.pop("slug")

        if "opening_hours" in changes:
            if data.opening_hours is None:
                changes.pop("opening_hours")
            else:
                changes["opening_hours"] = _opening_hours_document(data.opening_hours)

        for field in ("type", "name", "slot_duration_minutes", "images"):
            if field in changes and changes[field] is None:
                changes.pop(field)

        thumbnail = changes.get("thumbnail_url", venue.thumbnail_url)
        images = changes.get("images", venue.images or [])
        if thumbnail and thumbnail not in images:
            changes["images"] = [thumbnail, *images]

        for field, value in changes.items():
            setattr(venue, field, value)
        await self._flush(db, venue.slug)

        logger.info(f"Venue {venue.id} updated: {', '.join(sorted(changes)) or 'no changes'}")
        return venue

    async def list_managed(self, db: AsyncSession, actor: User) -> list[Venue]:
        query = select(Venue)
        if actor.role != UserRole.ADMIN.value:
            query = query.where(Venue.owner_id == actor.id)
        result = await db.execute(
            query.order_by(Venue.created_at.desc()).limit(settings.owner_list_limit)
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession) -> list[Venue]:
        result = await db.execute(
            select(Venue).order_by(Venue.created_at.desc()).limit(settings.admin_list_limit)
        )
        return list(result.scalars().all())

    async def list_active(self, db: AsyncSession) -> list[Venue]:
        result = await db.execute(
            select(Venue)
            .where(Venue.status == "ACTIVE")
            .order_by(Venue.created_at.desc())
            .limit(PUBLIC_LIST_LIMIT)
        )
        return list(result.scalars().all())

    async def get_active_by_slug(self, db: AsyncSession, slug: str) -> Venue:
        result = await db.execute(
            select(Venue).where(Venue.slug == slug, Venue.status == "ACTIVE")
        )
        venue = result.scalar_one_or_none()
        if not venue:
            raise NotFoundError("Venue")
        return venue

    async def set_status(self, db: AsyncSession, venue_id: UUID, status: str, admin: User) -> Venue:
        result = await db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue:
            raise NotFoundError("Venue", str(venue_id))

        previous = venue.status
        venue.status = status
        await db.flush()
        logger.info(f"Venue {venue.id} status {previous} -> {status} by admin {admin.id}")
        return venue


venue_service = VenueService()
