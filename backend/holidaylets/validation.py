"""Input validators.

Each validator inspects one inbound payload and returns every violation it
finds as a readable message; an empty list means the payload is acceptable.
Services turn a non-empty list into ``ValidationFailed``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from email_validator import EmailNotValidError, validate_email

from holidaylets.schemas.accommodation import (
    AccommodationCreate,
    AccommodationPatch,
    AvailabilityPeriodCreate,
)
from holidaylets.schemas.guest import GuestCreate, GuestUpdate

UK_POSTCODE_RE = re.compile(r"^([A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2})$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{6,30}$")

MAX_GUESTS_PER_BOOKING = 20

Rule = Callable[[Any], str | None]


def _text(label: str, *, max_length: int, min_length: int = 1, required: bool = True) -> Rule:
    def check(value: Any) -> str | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return f"{label} is required" if required else None
        if len(value) > max_length:
            return f"{label} cannot exceed {max_length} characters"
        if len(value.strip()) < min_length:
            return f"{label} must be at least {min_length} characters"
        return None

    return check


def _between(label: str, low: float, high: float, *, required: bool = True) -> Rule:
    def check(value: Any) -> str | None:
        if value is None:
            return f"{label} is required" if required else None
        if value < low or value > high:
            return f"{label} must be between {low:g} and {high:g}"
        return None

    return check


def _non_negative(label: str, *, required: bool = True) -> Rule:
    def check(value: Any) -> str | None:
        if value is None:
            return f"{label} is required" if required else None
        if Decimal(value) < 0:
            return f"{label} cannot be negative"
        return None

    return check


def _post_code(value: Any) -> str | None:
    if value is None or not value.strip():
        return "Post code is required"
    if len(value) > 10:
        return "Post code cannot exceed 10 characters"
    if not UK_POSTCODE_RE.match(value):
        return "Invalid UK Postcode format"
    return None


def _image_urls(value: Any) -> str | None:
    if value is None:
        return "Image URLs are required"
    if any(not url or not url.strip() for url in value):
        return "Image URLs cannot be blank"
    return None


def _required(label: str) -> Rule:
    def check(value: Any) -> str | None:
        return f"{label} is required" if value is None else None

    return check


_ACCOMMODATION_RULES: dict[str, Rule] = {
    "title": _text("Title", max_length=150, min_length=5),
    "name": _text("Name", max_length=150, required=False),
    "description": _text("Description", max_length=4000),
    "type": _required("Type"),
    "address_line1": _text("Address line 1", max_length=150),
    "address_line2": _text("Address line 2", max_length=100, required=False),
    "town": _text("Town", max_length=100),
    "post_code": _post_code,
    "latitude": _between("Latitude", -90, 90),
    "longitude": _between("Longitude", -180, 180),
    "distance_to_nearest_beach_km": _between(
        "Distance to nearest beach", 0, 1000, required=False
    ),
    "bedrooms": _between("Bedrooms", 0, 50),
    "bathrooms": _between("Bathrooms", 1, 50),
    "max_occupancy": _between("Max occupancy", 1, 100),
    "has_sea_view": _required("Sea view flag"),
    "amenities": _required("Amenities"),
    "image_urls": _image_urls,
    "base_price_per_night": _non_negative("Base price per night"),
    "cleaning_fee": _non_negative("Cleaning fee", required=False),
    "security_deposit": _non_negative("Security deposit", required=False),
}


def _apply_rules(rules: Mapping[str, Rule], values: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []
    for field, value in values.items():
        rule = rules.get(field)
        if rule is None:
            continue
        message = rule(value)
        if message:
            errors.append(message)
    return errors


def validate_accommodation(payload: AccommodationCreate) -> list[str]:
    """Validate a full accommodation payload (create or replace)."""
    return _apply_rules(_ACCOMMODATION_RULES, payload.model_dump())


def validate_accommodation_patch(payload: AccommodationPatch) -> list[str]:
    """Validate only the fields present in a partial update."""
    return _apply_rules(_ACCOMMODATION_RULES, payload.model_dump(exclude_unset=True))


def validate_availability_period(payload: AvailabilityPeriodCreate) -> list[str]:
    errors: list[str] = []
    if payload.end_date < payload.start_date:
        errors.append("End date must be on or after start date")
    if payload.price_per_night_override is not None and payload.price_per_night_override < 0:
        errors.append("Price per night override cannot be negative")
    if payload.minimum_stay_nights is not None and not 1 <= payload.minimum_stay_nights <= 365:
        errors.append("Minimum stay must be between 1 and 365 nights")
    if payload.notes is not None and len(payload.notes) > 100:
        errors.append("Notes cannot exceed 100 characters")
    return errors


def validate_stay_dates(check_in: date | None, check_out: date | None) -> list[str]:
    """Both dates present and check-out strictly after check-in."""
    errors: list[str] = []
    if check_in is None:
        errors.append("Check-in date is required")
    if check_out is None:
        errors.append("Check-out date is required")
    if check_in is not None and check_out is not None and check_out <= check_in:
        errors.append("Check-out date must be after check-in date")
    return errors


def _guest_count_errors(guest_count: int) -> list[str]:
    if not 1 <= guest_count <= MAX_GUESTS_PER_BOOKING:
        return [f"Guest count must be between 1 and {MAX_GUESTS_PER_BOOKING}"]
    return []


def _special_request_errors(special_requests: str | None) -> list[str]:
    if special_requests is not None and len(special_requests) > 500:
        return ["Special requests cannot exceed 500 characters"]
    return []


def validate_booking_create(
    *,
    check_in: date | None,
    check_out: date | None,
    guest_count: int,
    special_requests: str | None = None,
) -> list[str]:
    errors = validate_stay_dates(check_in, check_out)
    errors.extend(_guest_count_errors(guest_count))
    errors.extend(_special_request_errors(special_requests))
    return errors


def validate_booking_update(
    *, guest_count: int | None = None, special_requests: str | None = None
) -> list[str]:
    """Field-level checks; the merged date range is checked by the service."""
    errors: list[str] = []
    if guest_count is not None:
        errors.extend(_guest_count_errors(guest_count))
    errors.extend(_special_request_errors(special_requests))
    return errors


def validate_occupancy(guest_count: int, max_occupancy: int) -> list[str]:
    if guest_count > max_occupancy:
        return [
            f"Guest count ({guest_count}) exceeds the maximum occupancy "
            f"of {max_occupancy}"
        ]
    return []


def validate_cancellation(reason: str | None) -> list[str]:
    if reason is None or not reason.strip():
        return ["Cancellation reason is required"]
    if len(reason) > 500:
        return ["Cancellation reason cannot exceed 500 characters"]
    return []


def _email(value: Any) -> str | None:
    if value is None or not value.strip():
        return "Email is required"
    if len(value) > 100:
        return "Email cannot exceed 100 characters"
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return "Email is not a valid address"
    return None


def _phone(value: Any) -> str | None:
    if value is None or not value.strip():
        return "Phone is required"
    if len(value) > 30:
        return "Phone cannot exceed 30 characters"
    if not PHONE_RE.match(value):
        return "Phone is not a valid number"
    return None


_GUEST_RULES: dict[str, Rule] = {
    "first_name": _text("First name", max_length=50),
    "last_name": _text("Last name", max_length=50),
    "email": _email,
    "phone": _phone,
    "address": _text("Address", max_length=250, required=False),
}


def validate_guest(payload: GuestCreate) -> list[str]:
    return _apply_rules(_GUEST_RULES, payload.model_dump())


def validate_guest_update(payload: GuestUpdate) -> list[str]:
    return _apply_rules(_GUEST_RULES, payload.model_dump(exclude_unset=True))


def validate_review(rating: int, comment: str | None = None) -> list[str]:
    errors: list[str] = []
    if not 1 <= rating <= 5:
        errors.append("Rating must be between 1 and 5")
    if comment is not None and len(comment) > 2000:
        errors.append("Comment cannot exceed 2000 characters")
    return errors
