import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, date, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.security import create_tokens, get_password_hash
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models.booking import Booking
from app.models.user import User
from app.models.venue import Venue

# Monday; local opening hours are in UTC+06:00 unless a test says otherwise
BOOKING_DAY = date(2026, 11, 2)

DEFAULT_HOURS = {
    day: {"open": "10:00", "close": "22:00", "closed": False}
    for day in ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")
}

_PASSWORD_HASH = get_password_hash("Test@1234")


def utc(hour: int, minute: int = 0, day: date = BOOKING_DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable[..., Awaitable[User]]:
    counter = {"n": 0}

    async def _make(role: str = "USER", name: str | None = None, **kwargs: Any) -> User:
        counter["n"] += 1
        user = User(
            email=kwargs.pop("email", f"{role.lower()}{counter['n']}@slotbook.io"),
            name=name or f"{role.title()} {counter['n']}",
            phone=kwargs.pop("phone", "01712345678"),
            password_hash=_PASSWORD_HASH,
            role=role,
            **kwargs,
        )
        db.add(user)
        await db.commit()
        return user

    return _make


@pytest.fixture
def make_venue(db) -> Callable[..., Awaitable[Venue]]:
    counter = {"n": 0}

    async def _make(owner: User, **kwargs: Any) -> Venue:
        counter["n"] += 1
        venue = Venue(
            owner_id=owner.id,
            type=kwargs.pop("type", "TURF"),
            name=kwargs.pop("name", f"Green Field {counter['n']}"),
            slug=kwargs.pop("slug", f"green-field-{counter['n']}"),
            slot_duration_minutes=kwargs.pop("slot_duration_minutes", 60),
            opening_hours=kwargs.pop("opening_hours", DEFAULT_HOURS),
            status=kwargs.pop("status", "ACTIVE"),
            **kwargs,
        )
        db.add(venue)
        await db.commit()
        return venue

    return _make


@pytest.fixture
def make_booking(db) -> Callable[..., Awaitable[Booking]]:
    """Insert a booking row directly, bypassing the creation guard."""
    counter = {"n": 0}

    async def _make(venue: Venue, start: datetime, end: datetime, status: str = "PENDING") -> Booking:
        counter["n"] += 1
        booking = Booking(
            booking_number=f"BK-T{counter['n']:05d}",
            venue_id=venue.id,
            owner_id=venue.owner_id,
            guest_name="Walk In",
            guest_phone="01712345678",
            start_at=start,
            end_at=end,
            status=status,
        )
        db.add(booking)
        await db.commit()
        return booking

    return _make


@pytest.fixture
async def owner(make_user) -> User:
    return await make_user("OWNER")


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user("ADMIN")


@pytest.fixture
async def customer(make_user) -> User:
    return await make_user("USER")


@pytest.fixture
async def venue(make_venue, owner) -> Venue:
    return await make_venue(owner)


def auth_headers(user: User) -> dict[str, str]:
    token = create_tokens(str(user.id), user.role)["access_token"]
    return {"Authorization": f"Bearer {token}"}
