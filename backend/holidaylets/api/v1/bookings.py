"""Booking API endpoints."""
from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.api import deps
from holidaylets.api.errors import http_error
from holidaylets.core.config import get_settings
from holidaylets.core.errors import DomainError
from holidaylets.models.booking import BookingStatus
from holidaylets.models.user import User
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
from holidaylets.schemas.review import ReviewCreate, ReviewRead
from holidaylets.services import availability_service, booking_service, review_service

router = APIRouter()


@router.get(
    "",
    response_model=PagedResult[BookingSummary],
    summary="Search bookings",
)
async def search_bookings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
    status_filter: Annotated[BookingStatus | None, Query(alias="status")] = None,
    from_date: date | None = None,
    to_date: date | None = None,
    guest_id: uuid.UUID | None = None,
    accommodation_id: uuid.UUID | None = None,
    page_number: int = 1,
    page_size: int | None = None,
) -> PagedResult[BookingSummary]:
    settings = get_settings()
    size = page_size if page_size is not None else settings.search_default_page_size
    filters = BookingFilter(
        status=status_filter,
        from_date=from_date,
        to_date=to_date,
        guest_id=guest_id,
        accommodation_id=accommodation_id,
        page_number=page_number,
        page_size=min(max(size, 1), settings.search_max_page_size),
    )
    return await booking_service.search_bookings(session, filters)


@router.get(
    "/check-availability",
    response_model=AvailabilityCheckRead,
    summary="Check accommodation availability",
)
async def check_availability(
    accommodation_id: uuid.UUID,
    check_in: date,
    check_out: date,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AvailabilityCheckRead:
    if check_out <= check_in:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Check-out date must be after check-in date",
        )
    available = await availability_service.is_available(
        session,
        accommodation_id=accommodation_id,
        check_in=check_in,
        check_out=check_out,
    )
    return AvailabilityCheckRead(
        accommodation_id=accommodation_id,
        check_in=check_in,
        check_out=check_out,
        available=available,
    )


@router.get(
    "/guest/{guest_id}",
    response_model=list[BookingSummary],
    summary="List bookings for a guest",
)
async def list_guest_bookings(
    guest_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> list[BookingSummary]:
    return await booking_service.list_bookings_for_guest(session, guest_id)


@router.get(
    "/accommodation/{accommodation_id}",
    response_model=list[BookingSummary],
    summary="List bookings for an accommodation",
)
async def list_accommodation_bookings(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> list[BookingSummary]:
    return await booking_service.list_bookings_for_accommodation(session, accommodation_id)


@router.get(
    "/{booking_id}",
    response_model=BookingDetail,
    summary="Get booking",
)
async def read_booking(
    booking_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingDetail:
    booking = await booking_service.get_booking(session, booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


@router.post(
    "",
    response_model=BookingDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create booking",
)
async def create_booking(
    payload: BookingCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingDetail:
    try:
        return await booking_service.create_booking(
            session,
            accommodation_id=payload.accommodation_id,
            guest_id=payload.guest_id,
            check_in=payload.check_in_date,
            check_out=payload.check_out_date,
            guest_count=payload.guest_count,
            special_requests=payload.special_requests,
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.put(
    "/{booking_id}",
    response_model=BookingDetail,
    summary="Update booking",
)
async def update_booking(
    booking_id: uuid.UUID,
    payload: BookingUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingDetail:
    try:
        return await booking_service.update_booking(
            session,
            booking_id=booking_id,
            check_in=payload.check_in_date,
            check_out=payload.check_out_date,
            guest_count=payload.guest_count,
            status=payload.status,
            special_requests=payload.special_requests,
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingDetail,
    summary="Cancel booking",
)
async def cancel_booking(
    booking_id: uuid.UUID,
    payload: CancellationRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> BookingDetail:
    try:
        return await booking_service.cancel_booking(
            session, booking_id=booking_id, reason=payload.reason
        )
    except DomainError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{booking_id}/review",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Review a completed stay",
)
async def review_booking(
    booking_id: uuid.UUID,
    payload: ReviewCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> ReviewRead:
    try:
        return await review_service.create_review(
            session,
            booking_id=booking_id,
            rating=payload.rating,
            comment=payload.comment,
        )
    except DomainError as exc:
        raise http_error(exc) from exc
