"""Pydantic schemas for accommodations and availability periods.

Range and length rules live in ``holidaylets.validation``; these models only
describe shape and types.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from holidaylets.models.accommodation import AccommodationType, AmenityType
from holidaylets.schemas.review import ReviewRead


class AccommodationCreate(BaseModel):
    """Full accommodation payload, used by POST and PUT."""

    title: str
    name: str | None = None
    description: str
    type: AccommodationType
    address_line1: str
    address_line2: str | None = None
    town: str
    post_code: str
    latitude: float
    longitude: float
    distance_to_nearest_beach_km: float | None = None
    bedrooms: int
    bathrooms: int
    max_occupancy: int
    has_sea_view: bool = False
    amenities: list[AmenityType] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    base_price_per_night: Decimal
    cleaning_fee: Decimal | None = None
    security_deposit: Decimal | None = None


class AccommodationPatch(BaseModel):
    """Partial accommodation payload; only fields sent are applied."""

    title: str | None = None
    name: str | None = None
    description: str | None = None
    type: AccommodationType | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    town: str | None = None
    post_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance_to_nearest_beach_km: float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    max_occupancy: int | None = None
    has_sea_view: bool | None = None
    amenities: list[AmenityType] | None = None
    image_urls: list[str] | None = None
    base_price_per_night: Decimal | None = None
    cleaning_fee: Decimal | None = None
    security_deposit: Decimal | None = None


class AccommodationFilter(BaseModel):
    """Search criteria; every filter is optional and they AND together."""

    town: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_bedrooms: int | None = None
    min_occupancy: int | None = None
    type: AccommodationType | None = None
    required_amenities: list[AmenityType] | None = None
    has_sea_view: bool | None = None
    sort_by: str | None = None
    sort_direction: str | None = None
    page_number: int = 1
    page_size: int = 10


class AccommodationSummary(BaseModel):
    """Listing card used in search results."""

    id: uuid.UUID
    title: str
    type: AccommodationType
    town: str
    bedrooms: int
    max_occupancy: int
    base_price_per_night: Decimal
    average_rating: Decimal | None = None
    has_sea_view: bool
    primary_image_url: str | None = None
    is_pet_friendly: bool


class AvailabilityPeriodCreate(BaseModel):
    """Payload for adding an availability period."""

    start_date: date
    end_date: date
    price_per_night_override: Decimal | None = None
    is_available: bool = True
    minimum_stay_nights: int | None = None
    notes: str | None = None


class AvailabilityPeriodRead(AvailabilityPeriodCreate):
    """Serialized availability period."""

    id: uuid.UUID
    accommodation_id: uuid.UUID


class AccommodationDetail(BaseModel):
    """Full listing view. Repeats the summary fields rather than extending it."""

    id: uuid.UUID
    title: str
    type: AccommodationType
    town: str
    bedrooms: int
    max_occupancy: int
    base_price_per_night: Decimal
    average_rating: Decimal | None = None
    review_count: int = 0
    has_sea_view: bool
    primary_image_url: str | None = None
    is_pet_friendly: bool

    name: str | None = None
    description: str
    address_line1: str
    address_line2: str | None = None
    post_code: str
    latitude: float
    longitude: float
    distance_to_nearest_beach_km: float | None = None
    bathrooms: int
    cleaning_fee: Decimal | None = None
    security_deposit: Decimal | None = None
    owner_id: uuid.UUID
    amenities: list[AmenityType] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    reviews: list[ReviewRead] = Field(default_factory=list)
    availability_periods: list[AvailabilityPeriodRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
