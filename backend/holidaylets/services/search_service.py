"""Accommodation search: filter, sort and paginate in SQL."""
from __future__ import annotations

from sqlalchemy import Select, String, and_, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.mapping import accommodation_to_summary
from holidaylets.models.accommodation import Accommodation, AccommodationAmenity
from holidaylets.schemas.accommodation import AccommodationFilter, AccommodationSummary
from holidaylets.schemas.common import PagedResult

_SORT_COLUMNS = {
    "rating": func.coalesce(Accommodation.average_rating, 0),
    "price": Accommodation.base_price_per_night,
    "name": Accommodation.title,
    "bedrooms": Accommodation.bedrooms,
}
_DEFAULT_SORT = "price"


def _apply_filters(stmt: Select, filters: AccommodationFilter) -> Select:
    term = (filters.town or "").strip().lower()
    if term:
        town = func.lower(Accommodation.town, type_=String)
        stmt = stmt.where(town.contains(term, autoescape=True))
    if filters.min_price is not None:
        stmt = stmt.where(Accommodation.base_price_per_night >= filters.min_price)
    if filters.max_price is not None:
        stmt = stmt.where(Accommodation.base_price_per_night <= filters.max_price)
    if filters.min_bedrooms is not None:
        stmt = stmt.where(Accommodation.bedrooms >= filters.min_bedrooms)
    if filters.min_occupancy is not None:
        stmt = stmt.where(Accommodation.max_occupancy >= filters.min_occupancy)
    if filters.type is not None:
        stmt = stmt.where(Accommodation.type == filters.type)
    if filters.has_sea_view is not None:
        stmt = stmt.where(Accommodation.has_sea_view.is_(filters.has_sea_view))
    for amenity in set(filters.required_amenities or ()):
        stmt = stmt.where(
            exists().where(
                and_(
                    AccommodationAmenity.accommodation_id == Accommodation.id,
                    AccommodationAmenity.amenity == amenity,
                )
            )
        )
    return stmt


def _apply_sort(stmt: Select, sort_by: str | None, sort_direction: str | None) -> Select:
    key = (sort_by or "").strip().lower()
    column = _SORT_COLUMNS.get(key, _SORT_COLUMNS[_DEFAULT_SORT])
    descending = (sort_direction or "").strip().lower() == "desc"
    primary = column.desc() if descending else column.asc()
    return stmt.order_by(primary, Accommodation.id.asc())


async def search_accommodations(
    session: AsyncSession, filters: AccommodationFilter
) -> PagedResult[AccommodationSummary]:
    """Return one page of accommodations matching every supplied filter.

    Unknown sort keys fall back to price; ties are broken by ascending id so
    pages are stable. ``total_count`` covers the whole filtered set.
    """
    page_number = max(filters.page_number, 1)
    page_size = max(filters.page_size, 1)

    filtered = _apply_filters(select(Accommodation), filters)
    count_stmt = select(func.count()).select_from(filtered.subquery())
    total_count = (await session.execute(count_stmt)).scalar_one()

    items: list[AccommodationSummary] = []
    if total_count:
        page_stmt = (
            _apply_sort(filtered, filters.sort_by, filters.sort_direction)
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        result = await session.execute(page_stmt)
        items = [accommodation_to_summary(row) for row in result.scalars().all()]

    return PagedResult[AccommodationSummary](
        items=items,
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
    )


__all__ = ["search_accommodations"]
