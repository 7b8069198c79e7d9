"""Schema exports."""

from holidaylets.schemas.accommodation import (
    AccommodationCreate,
    AccommodationDetail,
    AccommodationFilter,
    AccommodationPatch,
    AccommodationSummary,
    AvailabilityPeriodCreate,
    AvailabilityPeriodRead,
)
from holidaylets.schemas.booking import (
    AvailabilityCheckRead,
    BookingCreate,
    BookingDetail,
    BookingFilter,
    BookingSummary,
    BookingUpdate,
    CancellationRequest,
)
from holidaylets.schemas.common import PagedResult
from holidaylets.schemas.guest import GuestCreate, GuestRead, GuestSummary, GuestUpdate
from holidaylets.schemas.review import ReviewApprovalUpdate, ReviewCreate, ReviewRead
from holidaylets.schemas.user import Token, UserCreate, UserRead

__all__ = [
    "AccommodationCreate",
    "AccommodationDetail",
    "AccommodationFilter",
    "AccommodationPatch",
    "AccommodationSummary",
    "AvailabilityCheckRead",
    "AvailabilityPeriodCreate",
    "AvailabilityPeriodRead",
    "BookingCreate",
    "BookingDetail",
    "BookingFilter",
    "BookingSummary",
    "BookingUpdate",
    "CancellationRequest",
    "GuestCreate",
    "GuestRead",
    "GuestSummary",
    "GuestUpdate",
    "PagedResult",
    "ReviewApprovalUpdate",
    "ReviewCreate",
    "ReviewRead",
    "Token",
    "UserCreate",
    "UserRead",
]
