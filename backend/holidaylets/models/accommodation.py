"""Accommodation listing models."""
from __future__ import annotations

import enum
import uuid
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from holidaylets.db.base import Base
from holidaylets.models.mixins import TimestampMixin


class AccommodationType(str, enum.Enum):
    """Primary property category."""

    COTTAGE = "cottage"
    APARTMENT = "apartment"
    FLAT = "flat"
    HOUSE = "house"
    BUNGALOW = "bungalow"
    FARMHOUSE = "farmhouse"
    LODGE = "lodge"
    STUDIO = "studio"


class AmenityType(str, enum.Enum):
    """Features a guest can filter on."""

    WIFI = "wifi"
    PET_FRIENDLY = "pet_friendly"
    WASHING_MACHINE = "washing_machine"
    DISHWASHER = "dishwasher"
    HOT_TUB = "hot_tub"
    WOOD_BURNER = "wood_burner"
    EV_CHARGING = "ev_charging"
    AIR_CONDITIONING = "air_conditioning"
    BBQ = "bbq"


class AccommodationAmenity(Base):
    """One amenity of one accommodation; the pair is unique."""

    __tablename__ = "accommodation_amenities"

    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"), primary_key=True
    )
    amenity: Mapped[AmenityType] = mapped_column(Enum(AmenityType), primary_key=True)


class Accommodation(TimestampMixin, Base):
    """A rentable holiday property."""

    __tablename__ = "accommodations"
    __table_args__ = (
        CheckConstraint("max_occupancy >= 1", name="ck_accommodations_occupancy"),
        CheckConstraint(
            "base_price_per_night >= 0", name="ck_accommodations_base_price"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(150), nullable=False)
    name: Mapped[str | None] = mapped_column(String(150))
    description: Mapped[str] = mapped_column(String(4000), nullable=False)
    type: Mapped[AccommodationType] = mapped_column(
        Enum(AccommodationType), nullable=False
    )
    address_line1: Mapped[str] = mapped_column(String(150), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(100))
    town: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    post_code: Mapped[str] = mapped_column(String(10), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    distance_to_nearest_beach_km: Mapped[float | None] = mapped_column(Float)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False)
    has_sea_view: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image_urls: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    base_price_per_night: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False
    )
    cleaning_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    security_deposit: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    average_rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2))
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    amenity_links: Mapped[list[AccommodationAmenity]] = relationship(
        AccommodationAmenity,
        cascade="all, delete-orphan",
        lazy="selectin",
        passive_deletes=True,
    )

    @property
    def amenities(self) -> set[AmenityType]:
        return {link.amenity for link in self.amenity_links}

    @property
    def primary_image_url(self) -> str | None:
        return self.image_urls[0] if self.image_urls else None

    @property
    def is_pet_friendly(self) -> bool:
        return AmenityType.PET_FRIENDLY in self.amenities

    def set_amenities(self, amenities: Iterable[AmenityType]) -> None:
        """Replace the amenity set, touching only rows that actually change."""
        wanted = set(amenities)
        self.amenity_links = [
            link for link in self.amenity_links if link.amenity in wanted
        ]
        present = self.amenities
        for amenity in sorted(wanted - present, key=lambda item: item.value):
            self.amenity_links.append(AccommodationAmenity(amenity=amenity))
