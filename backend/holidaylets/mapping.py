"""Conversions between ORM rows and API representations.

Reads expect the relationships they touch (``Booking.accommodation``,
``Booking.guest``, ``Review.guest``) to be eager-loaded by the caller.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from holidaylets.models import (
    Accommodation,
    AvailabilityPeriod,
    Booking,
    Guest,
    Review,
)
from holidaylets.schemas.accommodation import (
    AccommodationCreate,
    AccommodationDetail,
    AccommodationSummary,
    AvailabilityPeriodCreate,
    AvailabilityPeriodRead,
)
from holidaylets.schemas.booking import BookingDetail, BookingSummary
from holidaylets.schemas.guest import GuestCreate, GuestRead, GuestSummary
from holidaylets.schemas.review import ReviewRead

ANONYMOUS_GUEST = "Anonymous"


def _sorted_amenities(accommodation: Accommodation) -> list:
    return sorted(accommodation.amenities, key=lambda amenity: amenity.value)


def accommodation_to_summary(accommodation: Accommodation) -> AccommodationSummary:
    return AccommodationSummary(
        id=accommodation.id,
        title=accommodation.title,
        type=accommodation.type,
        town=accommodation.town,
        bedrooms=accommodation.bedrooms,
        max_occupancy=accommodation.max_occupancy,
        base_price_per_night=accommodation.base_price_per_night,
        average_rating=accommodation.average_rating,
        has_sea_view=accommodation.has_sea_view,
        primary_image_url=accommodation.primary_image_url,
        is_pet_friendly=accommodation.is_pet_friendly,
    )


def accommodation_to_detail(
    accommodation: Accommodation,
    *,
    reviews: Iterable[Review] = (),
    periods: Iterable[AvailabilityPeriod] = (),
) -> AccommodationDetail:
    return AccommodationDetail(
        id=accommodation.id,
        title=accommodation.title,
        type=accommodation.type,
        town=accommodation.town,
        bedrooms=accommodation.bedrooms,
        max_occupancy=accommodation.max_occupancy,
        base_price_per_night=accommodation.base_price_per_night,
        average_rating=accommodation.average_rating,
        review_count=accommodation.review_count,
        has_sea_view=accommodation.has_sea_view,
        primary_image_url=accommodation.primary_image_url,
        is_pet_friendly=accommodation.is_pet_friendly,
        name=accommodation.name,
        description=accommodation.description,
        address_line1=accommodation.address_line1,
        address_line2=accommodation.address_line2,
        post_code=accommodation.post_code,
        latitude=accommodation.latitude,
        longitude=accommodation.longitude,
        distance_to_nearest_beach_km=accommodation.distance_to_nearest_beach_km,
        bathrooms=accommodation.bathrooms,
        cleaning_fee=accommodation.cleaning_fee,
        security_deposit=accommodation.security_deposit,
        owner_id=accommodation.owner_id,
        amenities=_sorted_amenities(accommodation),
        image_urls=list(accommodation.image_urls or []),
        reviews=[review_to_read(review) for review in reviews],
        availability_periods=[period_to_read(period) for period in periods],
        created_at=accommodation.created_at,
        updated_at=accommodation.updated_at,
    )


def accommodation_from_create(
    payload: AccommodationCreate, *, owner_id: uuid.UUID
) -> Accommodation:
    accommodation = Accommodation(owner_id=owner_id, review_count=0)
    apply_accommodation_fields(accommodation, payload.model_dump())
    return accommodation


def apply_accommodation_fields(
    accommodation: Accommodation, values: dict[str, Any]
) -> None:
    """Copy payload values onto the row; ``amenities`` goes through the link table."""
    values = dict(values)
    amenities = values.pop("amenities", None)
    for field, value in values.items():
        setattr(accommodation, field, list(value) if field == "image_urls" else value)
    if amenities is not None:
        accommodation.set_amenities(amenities)


def period_from_create(
    payload: AvailabilityPeriodCreate, *, accommodation_id: uuid.UUID
) -> AvailabilityPeriod:
    return AvailabilityPeriod(accommodation_id=accommodation_id, **payload.model_dump())


def period_to_read(period: AvailabilityPeriod) -> AvailabilityPeriodRead:
    return AvailabilityPeriodRead(
        id=period.id,
        accommodation_id=period.accommodation_id,
        start_date=period.start_date,
        end_date=period.end_date,
        price_per_night_override=period.price_per_night_override,
        is_available=period.is_available,
        minimum_stay_nights=period.minimum_stay_nights,
        notes=period.notes,
    )


def review_to_read(review: Review) -> ReviewRead:
    guest = review.guest
    return ReviewRead(
        id=review.id,
        accommodation_id=review.accommodation_id,
        booking_id=review.booking_id,
        rating=review.rating,
        comment=review.comment,
        is_approved=review.is_approved,
        review_date=review.review_date,
        guest_name=guest.full_name if guest is not None else ANONYMOUS_GUEST,
    )


def guest_from_create(payload: GuestCreate) -> Guest:
    return Guest(**payload.model_dump())


def guest_to_summary(guest: Guest) -> GuestSummary:
    return GuestSummary(
        id=guest.id,
        first_name=guest.first_name,
        last_name=guest.last_name,
        full_name=guest.full_name,
        email=guest.email,
    )


def guest_to_read(guest: Guest) -> GuestRead:
    return GuestRead(
        id=guest.id,
        first_name=guest.first_name,
        last_name=guest.last_name,
        email=guest.email,
        phone=guest.phone,
        address=guest.address,
        created_at=guest.created_at,
    )


def booking_to_summary(booking: Booking) -> BookingSummary:
    return BookingSummary(
        id=booking.id,
        accommodation_id=booking.accommodation_id,
        accommodation_name=booking.accommodation.title,
        guest_id=booking.guest_id,
        guest_name=booking.guest.full_name,
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        nights_count=booking.nights,
        total_price=booking.total_price,
        status=booking.status,
        booking_date=booking.booking_date,
    )


def booking_to_detail(booking: Booking) -> BookingDetail:
    return BookingDetail(
        id=booking.id,
        accommodation_id=booking.accommodation_id,
        accommodation=accommodation_to_summary(booking.accommodation),
        guest_id=booking.guest_id,
        guest=guest_to_summary(booking.guest),
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        nights_count=booking.nights,
        guest_count=booking.guest_count,
        total_price=booking.total_price,
        is_paid=booking.is_paid,
        status=booking.status,
        booking_date=booking.booking_date,
        special_requests=booking.special_requests,
        cancellation_date=booking.cancellation_date,
        cancellation_reason=booking.cancellation_reason,
    )


__all__ = [
    "ANONYMOUS_GUEST",
    "accommodation_from_create",
    "accommodation_to_detail",
    "accommodation_to_summary",
    "apply_accommodation_fields",
    "booking_to_detail",
    "booking_to_summary",
    "guest_from_create",
    "guest_to_read",
    "guest_to_summary",
    "period_from_create",
    "period_to_read",
    "review_to_read",
]
