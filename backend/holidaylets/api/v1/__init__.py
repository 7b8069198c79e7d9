"""Versioned API router."""

from fastapi import APIRouter

from . import accommodations, auth, bookings, guests, health, reviews, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(accommodations.router, prefix="/accommodations", tags=["accommodations"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(guests.router, prefix="/guests", tags=["guests"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])

__all__ = ["router"]
