"""Role-based access control and permissions."""

from enum import Enum


class UserRole(str, Enum):
    """User roles in the system."""

    USER = "USER"
    OWNER = "OWNER"
    ADMIN = "ADMIN"


class Permission(str, Enum):
    """System permissions."""

    # Booking permissions
    DECIDE_BOOKING = "decide_booking"
    OVERRIDE_BOOKING = "override_booking"
    VIEW_ALL_BOOKINGS = "view_all_bookings"

    # Venue permissions
    MANAGE_VENUES = "manage_venues"
    MANAGE_ANY_VENUE = "manage_any_venue"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserRole, set[Permission]] = {
    UserRole.USER: set(),
    UserRole.OWNER: {
        Permission.DECIDE_BOOKING,
        Permission.MANAGE_VENUES,
    },
    UserRole.ADMIN: {
        # Admins have all permissions
        perm for perm in Permission
    },
}


def has_permission(role: UserRole | str, permission: Permission) -> bool:
    """Check if a role has a specific permission."""
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS.get(role, set())


def can_manage_venue(role: UserRole | str, user_id, owner_id) -> bool:
    """Owners manage their own venues; admins manage any venue."""
    if has_permission(role, Permission.MANAGE_ANY_VENUE):
        return True
    return has_permission(role, Permission.MANAGE_VENUES) and user_id == owner_id
