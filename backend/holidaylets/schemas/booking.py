"""Pydantic schemas for bookings."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from holidaylets.models.booking import BookingStatus
from holidaylets.schemas.accommodation import AccommodationSummary
from holidaylets.schemas.guest import GuestSummary


class BookingCreate(BaseModel):
    """Payload for requesting a stay."""

    accommodation_id: uuid.UUID
    guest_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    guest_count: int
    special_requests: str | None = None


class BookingUpdate(BaseModel):
    """Partial booking update; absent fields are left as they are."""

    check_in_date: date | None = None
    check_out_date: date | None = None
    guest_count: int | None = None
    status: BookingStatus | None = None
    special_requests: str | None = None


class CancellationRequest(BaseModel):
    """Payload for cancelling a booking."""

    reason: str


class BookingFilter(BaseModel):
    """Criteria for paging through bookings."""

    status: BookingStatus | None = None
    from_date: date | None = None
    to_date: date | None = None
    guest_id: uuid.UUID | None = None
    accommodation_id: uuid.UUID | None = None
    page_number: int = 1
    page_size: int = 10


class BookingSummary(BaseModel):
    """Row in booking listings."""

    id: uuid.UUID
    accommodation_id: uuid.UUID
    accommodation_name: str
    guest_id: uuid.UUID
    guest_name: str
    check_in_date: date
    check_out_date: date
    nights_count: int
    total_price: Decimal
    status: BookingStatus
    booking_date: datetime


class BookingDetail(BaseModel):
    """Full booking view with the accommodation card and guest embedded."""

    id: uuid.UUID
    accommodation_id: uuid.UUID
    accommodation: AccommodationSummary
    guest_id: uuid.UUID
    guest: GuestSummary
    check_in_date: date
    check_out_date: date
    nights_count: int
    guest_count: int
    total_price: Decimal
    is_paid: bool
    status: BookingStatus
    booking_date: datetime
    special_requests: str | None = None
    cancellation_date: datetime | None = None
    cancellation_reason: str | None = None


class AvailabilityCheckRead(BaseModel):
    """Answer to an availability query."""

    accommodation_id: uuid.UUID
    check_in: date
    check_out: date
    available: bool
