"""ORM models package export."""

from holidaylets.models.accommodation import (
    Accommodation,
    AccommodationAmenity,
    AccommodationType,
    AmenityType,
)
from holidaylets.models.availability import AvailabilityPeriod
from holidaylets.models.booking import Booking, BookingStatus
from holidaylets.models.guest import Guest
from holidaylets.models.review import Review
from holidaylets.models.user import User, UserRole

__all__ = [
    "Accommodation",
    "AccommodationAmenity",
    "AccommodationType",
    "AmenityType",
    "AvailabilityPeriod",
    "Booking",
    "BookingStatus",
    "Guest",
    "Review",
    "User",
    "UserRole",
]
