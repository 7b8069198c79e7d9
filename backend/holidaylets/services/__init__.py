"""Service layer exports."""
from holidaylets.services import (
    accommodation_service,
    auth_service,
    availability_service,
    booking_service,
    bootstrap_service,
    guest_service,
    pricing_service,
    review_service,
    search_service,
    user_service,
)

__all__ = [
    "accommodation_service",
    "auth_service",
    "availability_service",
    "booking_service",
    "bootstrap_service",
    "guest_service",
    "pricing_service",
    "review_service",
    "search_service",
    "user_service",
]
