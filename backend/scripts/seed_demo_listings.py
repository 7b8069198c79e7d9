"""Seed a local database with an owner, Cornwall listings and guests.

Run after ``alembic upgrade head``::

    python scripts/seed_demo_listings.py
"""
from __future__ import annotations

import asyncio
import os
from datetime import UTC, date, datetime
from decimal import Decimal

from holidaylets.core.config import get_settings
from holidaylets.db.session import get_sessionmaker
from holidaylets.models import AccommodationType, AmenityType, UserRole
from holidaylets.schemas.accommodation import AccommodationCreate, AvailabilityPeriodCreate
from holidaylets.schemas.guest import GuestCreate
from holidaylets.schemas.user import UserCreate
from holidaylets.services import accommodation_service, guest_service, user_service

OWNER_EMAIL = os.environ.get("SEED_OWNER_EMAIL", "owner@example.com")
OWNER_PASSWORD = os.environ.get("SEED_OWNER_PASSWORD", "owner-dev-only")

LISTINGS = [
    {
        "title": "Charming Sea View Cottage",
        "name": "Sea View Cottage",
        "description": "Charming cottage with stunning sea views.",
        "type": AccommodationType.COTTAGE,
        "address_line1": "1 Cliff Road",
        "town": "St Ives",
        "post_code": "TR26 1AB",
        "latitude": 50.2108,
        "longitude": -5.4806,
        "bedrooms": 2,
        "bathrooms": 1,
        "max_occupancy": 4,
        "has_sea_view": True,
        "amenities": [AmenityType.WIFI, AmenityType.WASHING_MACHINE],
        "image_urls": ["stives_cottage1.jpg", "stives_cottage2.jpg"],
        "base_price_per_night": Decimal("135.71"),
    },
    {
        "title": "Modern Beach Apartment",
        "name": "Fistral Beach Apartment",
        "description": "Modern apartment near Fistral Beach.",
        "type": AccommodationType.APARTMENT,
        "address_line1": "52 Beach Road",
        "town": "Newquay",
        "post_code": "TR7 1DY",
        "latitude": 50.4172,
        "longitude": -5.0747,
        "bedrooms": 2,
        "bathrooms": 1,
        "max_occupancy": 4,
        "has_sea_view": True,
        "amenities": [AmenityType.WIFI, AmenityType.DISHWASHER],
        "image_urls": ["newquay_apt1.jpg", "newquay_apt2.jpg"],
        "base_price_per_night": Decimal("144.00"),
    },
    {
        "title": "Historic Harbour House",
        "name": "Harbour House",
        "description": "Characterful house overlooking the harbour.",
        "type": AccommodationType.HOUSE,
        "address_line1": "3 Harbour Street",
        "town": "Mousehole",
        "post_code": "TR19 6PL",
        "latitude": 50.0833,
        "longitude": -5.5333,
        "bedrooms": 3,
        "bathrooms": 2,
        "max_occupancy": 6,
        "has_sea_view": True,
        "amenities": [AmenityType.WIFI, AmenityType.PET_FRIENDLY],
        "image_urls": ["mousehole_house1.jpg", "mousehole_house2.jpg"],
        "base_price_per_night": Decimal("136.00"),
    },
    {
        "title": "Quiet Padstow Hideaway",
        "name": "Padstow Hideaway",
        "description": "A quiet retreat near Padstow harbour.",
        "type": AccommodationType.COTTAGE,
        "address_line1": "7 Harbour Road",
        "town": "Padstow",
        "post_code": "PL28 8BY",
        "latitude": 50.5432,
        "longitude": -4.9360,
        "bedrooms": 2,
        "bathrooms": 2,
        "max_occupancy": 4,
        "has_sea_view": False,
        "amenities": [AmenityType.WIFI, AmenityType.BBQ],
        "image_urls": ["padstow_hideaway1.jpg", "padstow_hideaway2.jpg"],
        "base_price_per_night": Decimal("130.00"),
    },
    {
        "title": "Bude Surfer's Lodge",
        "name": "Bude Surfer's Lodge",
        "description": "Lodge ideal for surfers near Bude beaches.",
        "type": AccommodationType.LODGE,
        "address_line1": "7 Surf Lane",
        "town": "Bude",
        "post_code": "EX23 8SD",
        "latitude": 50.8295,
        "longitude": -4.5515,
        "bedrooms": 3,
        "bathrooms": 2,
        "max_occupancy": 6,
        "has_sea_view": True,
        "amenities": [AmenityType.WIFI, AmenityType.HOT_TUB],
        "image_urls": ["bude_lodge1.jpg", "bude_lodge2.jpg"],
        "base_price_per_night": Decimal("150.00"),
    },
    {
        "title": "Picturesque Valley Cottage",
        "name": "Looe Valley Cottage",
        "description": "Picturesque cottage in the Looe Valley.",
        "type": AccommodationType.COTTAGE,
        "address_line1": "5 Valley Road",
        "town": "Looe",
        "post_code": "PL13 1FA",
        "latitude": 50.3514,
        "longitude": -4.4544,
        "bedrooms": 2,
        "bathrooms": 1,
        "max_occupancy": 4,
        "has_sea_view": False,
        "amenities": [AmenityType.WIFI, AmenityType.PET_FRIENDLY, AmenityType.WOOD_BURNER],
        "image_urls": ["looe_cottage1.jpg", "looe_cottage2.jpg"],
        "base_price_per_night": Decimal("120.00"),
    },
]

GUESTS = [
    ("Alice", "Johnson", "alice.j@email.com", "07700900001"),
    ("Bob", "Williams", "bob.w@email.com", "07700900002"),
    ("Charlie", "Brown", "charlie.b@email.com", "07700900003"),
    ("Diana", "Davis", "diana.d@email.com", "07700900004"),
    ("Ethan", "Miller", "ethan.m@email.com", "07700900005"),
]


def _season_periods(year: int) -> list[AvailabilityPeriodCreate]:
    return [
        AvailabilityPeriodCreate(
            start_date=date(year, 4, 1),
            end_date=date(year, 10, 31),
            notes="Main season",
        ),
        AvailabilityPeriodCreate(
            start_date=date(year, 7, 20),
            end_date=date(year, 8, 31),
            price_per_night_override=Decimal("185.00"),
            minimum_stay_nights=7,
            notes="School holidays",
        ),
    ]


async def main() -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    year = datetime.now(UTC).year
    async with sessionmaker() as session:
        owner = await user_service.get_user_by_email(session, OWNER_EMAIL)
        if owner is not None:
            print(f"Owner {OWNER_EMAIL} already exists; nothing to seed")
            return
        owner = await user_service.create_user(
            session,
            UserCreate(
                email=OWNER_EMAIL,
                password=OWNER_PASSWORD,
                first_name="Demo",
                last_name="Owner",
                role=UserRole.OWNER,
            ),
        )

        for listing in LISTINGS:
            detail = await accommodation_service.create_accommodation(
                session, owner_id=owner.id, payload=AccommodationCreate(**listing)
            )
            for period in _season_periods(year):
                await accommodation_service.add_availability_period(
                    session, accommodation_id=detail.id, payload=period
                )
            print(f"Seeded {detail.title} ({detail.town})")

        for first_name, last_name, email, phone in GUESTS:
            await guest_service.create_guest(
                session,
                GuestCreate(
                    first_name=first_name, last_name=last_name, email=email, phone=phone
                ),
            )
        print(f"Seeded {len(LISTINGS)} listings and {len(GUESTS)} guests")


if __name__ == "__main__":
    asyncio.run(main())
