"""Accommodation search and listing management endpoints."""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.api import deps
from holidaylets.api.errors import http_error
from holidaylets.core.config import get_settings
from holidaylets.core.errors import DomainError
from holidaylets.models.accommodation import Accommodation, AccommodationType, AmenityType
from holidaylets.models.user import User
from holidaylets.schemas.accommodation import (
    AccommodationCreate,
    AccommodationDetail,
    AccommodationFilter,
    AccommodationPatch,
    AccommodationSummary,
    AvailabilityPeriodCreate,
    AvailabilityPeriodRead,
)
from holidaylets.schemas.common import PagedResult
from holidaylets.schemas.review import ReviewRead
from holidaylets.security.permissions import LISTING_MANAGERS, ensure_can_manage, require_roles
from holidaylets.services import accommodation_service, review_service, search_service

router = APIRouter()


async def _managed_accommodation(
    session: AsyncSession, accommodation_id: uuid.UUID, user: User
) -> Accommodation:
    accommodation = await accommodation_service.get_accommodation(session, accommodation_id)
    if accommodation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accommodation not found")
    ensure_can_manage(user, accommodation)
    return accommodation


@router.get(
    "",
    response_model=PagedResult[AccommodationSummary],
    summary="Search accommodations",
)
async def search_accommodations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    town: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    min_bedrooms: int | None = None,
    min_occupancy: int | None = None,
    type: AccommodationType | None = None,
    required_amenities: Annotated[list[AmenityType] | None, Query()] = None,
    has_sea_view: bool | None = None,
    sort_by: str | None = None,
    sort_direction: str | None = None,
    page_number: int = 1,
    page_size: int | None = None,
) -> PagedResult[AccommodationSummary]:
    settings = get_settings()
    size = page_size if page_size is not None else settings.search_default_page_size
    filters = AccommodationFilter(
        town=town,
        min_price=min_price,
        max_price=max_price,
        min_bedrooms=min_bedrooms,
        min_occupancy=min_occupancy,
        type=type,
        required_amenities=required_amenities,
        has_sea_view=has_sea_view,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page_number=page_number,
        page_size=min(max(size, 1), settings.search_max_page_size),
    )
    return await search_service.search_accommodations(session, filters)


@router.get(
    "/{accommodation_id}",
    response_model=AccommodationDetail,
    summary="Get accommodation",
)
async def read_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationDetail:
    detail = await accommodation_service.get_accommodation_detail(session, accommodation_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accommodation not found")
    return detail


@router.post(
    "",
    response_model=AccommodationDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create accommodation",
)
async def create_accommodation(
    payload: AccommodationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> AccommodationDetail:
    require_roles(current_user, LISTING_MANAGERS)
    try:
        return await accommodation_service.create_accommodation(
            session, owner_id=current_user.id, payload=payload
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.put(
    "/{accommodation_id}",
    response_model=AccommodationDetail,
    summary="Replace accommodation",
)
async def replace_accommodation(
    accommodation_id: uuid.UUID,
    payload: AccommodationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> AccommodationDetail:
    accommodation = await _managed_accommodation(session, accommodation_id, current_user)
    try:
        return await accommodation_service.replace_accommodation(
            session, accommodation=accommodation, payload=payload
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.patch(
    "/{accommodation_id}",
    response_model=AccommodationDetail,
    summary="Update accommodation",
)
async def patch_accommodation(
    accommodation_id: uuid.UUID,
    payload: AccommodationPatch,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> AccommodationDetail:
    accommodation = await _managed_accommodation(session, accommodation_id, current_user)
    try:
        return await accommodation_service.patch_accommodation(
            session, accommodation=accommodation, payload=payload
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.delete(
    "/{accommodation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete accommodation",
)
async def delete_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> None:
    accommodation = await _managed_accommodation(session, accommodation_id, current_user)
    try:
        await accommodation_service.delete_accommodation(session, accommodation=accommodation)
    except DomainError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{accommodation_id}/availability",
    response_model=list[AvailabilityPeriodRead],
    summary="List availability periods",
)
async def list_availability_periods(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[AvailabilityPeriodRead]:
    try:
        return await accommodation_service.list_availability_periods(session, accommodation_id)
    except DomainError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{accommodation_id}/availability",
    response_model=AvailabilityPeriodRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add availability period",
)
async def add_availability_period(
    accommodation_id: uuid.UUID,
    payload: AvailabilityPeriodCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> AvailabilityPeriodRead:
    await _managed_accommodation(session, accommodation_id, current_user)
    try:
        return await accommodation_service.add_availability_period(
            session, accommodation_id=accommodation_id, payload=payload
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.get(
    "/{accommodation_id}/reviews",
    response_model=list[ReviewRead],
    summary="List approved reviews",
)
async def list_reviews(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[ReviewRead]:
    try:
        return await review_service.list_reviews_for_accommodation(session, accommodation_id)
    except DomainError as exc:
        raise http_error(exc) from exc
