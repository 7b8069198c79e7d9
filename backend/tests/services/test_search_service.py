"""Tests for accommodation search."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from holidaylets.db.session import get_sessionmaker
from holidaylets.models import Accommodation, AccommodationType, AmenityType, User, UserRole
from holidaylets.schemas.accommodation import AccommodationCreate, AccommodationFilter
from holidaylets.services import accommodation_service
from holidaylets.services.search_service import search_accommodations

pytestmark = pytest.mark.asyncio


async def _owner(session) -> uuid.UUID:
    owner = User(
        email="search.owner@example.com",
        hashed_password="x",
        first_name="Sam",
        last_name="Owner",
        role=UserRole.OWNER,
    )
    session.add(owner)
    await session.commit()
    return owner.id


async def _listing(session, owner_id: uuid.UUID, title: str, **overrides) -> uuid.UUID:
    values = {
        "title": title,
        "description": f"{title} in Cornwall.",
        "type": AccommodationType.COTTAGE,
        "address_line1": "1 Harbour Road",
        "town": "St Ives",
        "post_code": "TR26 1AB",
        "latitude": 50.21,
        "longitude": -5.48,
        "bedrooms": 2,
        "bathrooms": 1,
        "max_occupancy": 4,
        "base_price_per_night": Decimal("100.00"),
    }
    values.update(overrides)
    detail = await accommodation_service.create_accommodation(
        session, owner_id=owner_id, payload=AccommodationCreate(**values)
    )
    return detail.id


async def test_filters_then_sorts_descending_with_id_tiebreak(
    reset_database, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        ids = {}
        for title, price, bedrooms in [
            ("Listing One", "100", 1),
            ("Listing Two", "150", 2),
            ("Listing Three", "200", 3),
            ("Listing Four", "150", 2),
        ]:
            ids[title] = await _listing(
                session,
                owner_id,
                title,
                base_price_per_night=Decimal(price),
                bedrooms=bedrooms,
            )

        page = await search_accommodations(
            session,
            AccommodationFilter(min_bedrooms=2, sort_by="price", sort_direction="DESC"),
        )

    assert page.total_count == 3
    assert [item.base_price_per_night for item in page.items] == [
        Decimal("200.00"),
        Decimal("150.00"),
        Decimal("150.00"),
    ]
    assert page.items[0].id == ids["Listing Three"]
    assert [item.id for item in page.items[1:]] == sorted(
        [ids["Listing Two"], ids["Listing Four"]]
    )
    assert page.total_pages == 1
    assert not page.has_next_page
    assert not page.has_previous_page


async def test_pages_concatenate_to_full_result(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        for index in range(7):
            await _listing(
                session,
                owner_id,
                f"Cottage number {index}",
                base_price_per_night=Decimal(100 + (index % 3) * 10),
            )

        everything = await search_accommodations(
            session, AccommodationFilter(page_size=50)
        )
        collected = []
        for page_number in (1, 2, 3):
            page = await search_accommodations(
                session, AccommodationFilter(page_number=page_number, page_size=3)
            )
            assert page.total_count == 7
            assert page.total_pages == 3
            collected.extend(item.id for item in page.items)

        beyond = await search_accommodations(
            session, AccommodationFilter(page_number=4, page_size=3)
        )

    assert collected == [item.id for item in everything.items]
    assert len(set(collected)) == 7
    prices = [item.base_price_per_night for item in everything.items]
    assert prices == sorted(prices)
    assert beyond.items == []
    assert beyond.total_count == 7
    assert beyond.has_previous_page


async def test_town_filter_is_case_insensitive_substring(
    reset_database, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        newquay = await _listing(session, owner_id, "Surf Shack", town="Newquay")
        await _listing(session, owner_id, "Harbour Loft", town="St Ives")
        await _listing(session, owner_id, "Percent House", town="100% Bay")

        found = await search_accommodations(session, AccommodationFilter(town="QUAY"))
        wildcard = await search_accommodations(session, AccommodationFilter(town="%"))
        underscore = await search_accommodations(session, AccommodationFilter(town="_"))

    assert [item.id for item in found.items] == [newquay]
    assert [item.title for item in wildcard.items] == ["Percent House"]
    assert underscore.total_count == 0


async def test_blank_town_does_not_filter(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        await _listing(session, owner_id, "Surf Shack", town="Newquay")
        await _listing(session, owner_id, "Harbour Loft", town="St Ives")

        blank = await search_accommodations(session, AccommodationFilter(town="  "))
        padded = await search_accommodations(session, AccommodationFilter(town=" ives "))

    assert blank.total_count == 2
    assert [item.title for item in padded.items] == ["Harbour Loft"]


async def test_amenities_must_all_be_present(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        both = await _listing(
            session,
            owner_id,
            "Dog Friendly Barn",
            amenities=[AmenityType.WIFI, AmenityType.PET_FRIENDLY],
        )
        await _listing(session, owner_id, "Connected Flat", amenities=[AmenityType.WIFI])
        await _listing(session, owner_id, "Off Grid Hut")

        page = await search_accommodations(
            session,
            AccommodationFilter(
                required_amenities=[AmenityType.PET_FRIENDLY, AmenityType.WIFI]
            ),
        )

    assert [item.id for item in page.items] == [both]
    assert page.items[0].is_pet_friendly


async def test_type_sea_view_price_and_occupancy_filters(
    reset_database, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        lodge = await _listing(
            session,
            owner_id,
            "Clifftop Lodge",
            type=AccommodationType.LODGE,
            has_sea_view=True,
            max_occupancy=6,
            base_price_per_night=Decimal("180.00"),
        )
        await _listing(
            session,
            owner_id,
            "Inland Lodge",
            type=AccommodationType.LODGE,
            has_sea_view=False,
            max_occupancy=6,
        )
        await _listing(session, owner_id, "Seaside Cottage", has_sea_view=True)

        lodges = await search_accommodations(
            session, AccommodationFilter(type=AccommodationType.LODGE)
        )
        sea_view_lodges = await search_accommodations(
            session,
            AccommodationFilter(type=AccommodationType.LODGE, has_sea_view=True),
        )
        pricey_big = await search_accommodations(
            session,
            AccommodationFilter(
                min_price=Decimal("150"), max_price=Decimal("200"), min_occupancy=5
            ),
        )
        nothing = await search_accommodations(
            session, AccommodationFilter(max_price=Decimal("50"))
        )

    assert lodges.total_count == 2
    assert [item.id for item in sea_view_lodges.items] == [lodge]
    assert [item.id for item in pricey_big.items] == [lodge]
    assert nothing.total_count == 0
    assert nothing.items == []
    assert nothing.total_pages == 0


async def test_unknown_sort_falls_back_to_price(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        await _listing(session, owner_id, "Zeta Cottage", base_price_per_night=Decimal("90"))
        await _listing(session, owner_id, "Alpha Cottage", base_price_per_night=Decimal("120"))

        by_name = await search_accommodations(
            session, AccommodationFilter(sort_by="name")
        )
        fallback = await search_accommodations(
            session, AccommodationFilter(sort_by="popularity")
        )

    assert [item.title for item in by_name.items] == ["Alpha Cottage", "Zeta Cottage"]
    assert [item.title for item in fallback.items] == ["Zeta Cottage", "Alpha Cottage"]


async def test_rating_sort_treats_missing_rating_as_zero(
    reset_database, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        rated = await _listing(session, owner_id, "Rated Cottage")
        zero = await _listing(session, owner_id, "Zero Cottage")
        unrated = await _listing(session, owner_id, "Unrated Cottage")
        for listing_id, rating in [(rated, Decimal("4.50")), (zero, Decimal("0.00"))]:
            row = await session.get(Accommodation, listing_id)
            row.average_rating = rating
        await session.commit()

        ascending = await search_accommodations(
            session, AccommodationFilter(sort_by="rating", sort_direction="asc")
        )
        descending = await search_accommodations(
            session, AccommodationFilter(sort_by="Rating", sort_direction="DESC")
        )

    # an explicit zero ties with a missing rating, so the tie-break decides
    tied = sorted([zero, unrated])
    assert [item.id for item in ascending.items] == [*tied, rated]
    assert [item.id for item in descending.items] == [rated, *tied]


async def test_bedrooms_sort_breaks_ties_by_id(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        owner_id = await _owner(session)
        first = await _listing(session, owner_id, "Big House", bedrooms=4)
        small = await _listing(session, owner_id, "Small Flat", bedrooms=1)
        second = await _listing(session, owner_id, "Big Barn", bedrooms=4)

        largest_first = await search_accommodations(
            session, AccommodationFilter(sort_by="bedrooms", sort_direction="desc")
        )
        smallest_first = await search_accommodations(
            session, AccommodationFilter(sort_by="bedrooms")
        )

    big = sorted([first, second])
    assert [item.id for item in largest_first.items] == [*big, small]
    assert [item.id for item in smallest_first.items] == [small, *big]
