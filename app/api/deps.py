"""API dependencies for authentication and common operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.permissions import Permission, has_permission
from app.core.security import verify_token
from app.database import get_db
from app.models.user import User

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_optional_user",
    "get_current_owner",
    "get_current_admin",
    "PermissionChecker",
    "require_booking_decider",
    "require_booking_override",
]

# Security scheme
security = HTTPBearer(auto_error=False)


async def _user_from_token(db: AsyncSession, token: str) -> User:
    payload = verify_token(token, token_type="access")
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")
    try:
        user_uuid = UUID(str(user_id))
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if not user:
        raise AuthenticationError("User not found")
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if not credentials:
        raise AuthenticationError("Not authenticated")
    return await _user_from_token(db, credentials.credentials)


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user and verify they are active."""
    if not current_user.is_active:
        raise AuthorizationError("User account is deactivated")
    return current_user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Optionally get the current user; anonymous requests take the guest path."""
    if not credentials:
        return None

    try:
        user = await _user_from_token(db, credentials.credentials)
    except AuthenticationError:
        return None
    return user if user.is_active else None


async def get_current_owner(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """Get current user and verify they are a venue owner (or admin)."""
    if not has_permission(current_user.role, Permission.MANAGE_VENUES):
        raise AuthorizationError("Owner access required")
    return current_user


async def get_current_admin(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """Get current user and verify they are an admin."""
    if not has_permission(current_user.role, Permission.MANAGE_ANY_VENUE):
        raise AuthorizationError("Admin access required")
    return current_user


class PermissionChecker:
    """Require a single permission from the current user's role."""

    def __init__(self, permission: Permission):
        self.permission = permission

    async def __call__(
        self,
        current_user: Annotated[User, Depends(get_current_active_user)],
    ) -> User:
        if not has_permission(current_user.role, self.permission):
            raise AuthorizationError(f"Missing permission: {self.permission.value}")
        return current_user


# Convenience instances
require_booking_decider = PermissionChecker(Permission.DECIDE_BOOKING)
require_booking_override = PermissionChecker(Permission.OVERRIDE_BOOKING)
