"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import admin, auth, bookings, owner, venues

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Venues
api_router.include_router(venues.router, prefix="/venues", tags=["Venues"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Owner dashboard
api_router.include_router(owner.router, prefix="/owner", tags=["Owner"])

# Admin
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
