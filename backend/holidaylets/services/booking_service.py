"""Booking lifecycle management.

Creating or moving a booking is a read-then-write inside one session: the
overlap check and the insert are not serialised against other requests.
Protection against two concurrent requests booking the same nights has to
come from the database, e.g. a PostgreSQL ``EXCLUDE USING gist`` constraint
over ``(accommodation_id, daterange(check_in_date, check_out_date))``.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from holidaylets.core.errors import ConflictError, NotFoundError, raise_for_violations
from holidaylets.mapping import booking_to_detail, booking_to_summary
from holidaylets.models.accommodation import Accommodation
from holidaylets.models.booking import Booking, BookingStatus
from holidaylets.models.guest import Guest
from holidaylets.models.mixins import utcnow
from holidaylets.schemas.booking import BookingDetail, BookingFilter, BookingSummary
from holidaylets.schemas.common import PagedResult
from holidaylets.services import pricing_service
from holidaylets.services.availability_service import is_available
from holidaylets.validation import (
    validate_booking_create,
    validate_booking_update,
    validate_cancellation,
    validate_occupancy,
    validate_stay_dates,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    },
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
    BookingStatus.NO_SHOW: set(),
}

UNAVAILABLE_MESSAGE = "The accommodation is not available for the selected dates"


def _base_booking_query():
    return select(Booking).options(
        selectinload(Booking.accommodation),
        selectinload(Booking.guest),
    )


def _newest_first(stmt):
    return stmt.order_by(Booking.booking_date.desc(), Booking.id.asc())


async def _load_booking(session: AsyncSession, booking_id: uuid.UUID) -> Booking | None:
    stmt = (
        _base_booking_query()
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def _require_booking(session: AsyncSession, booking_id: uuid.UUID) -> Booking:
    booking = await _load_booking(session, booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


async def _commit(session: AsyncSession, *, action: str, booking_id: uuid.UUID | None) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Booking %s rejected by the database on %s", booking_id, action)
        raise ConflictError(f"Could not {action} booking: conflicting data") from exc
    except SQLAlchemyError:
        logger.exception("Failed to %s booking %s", action, booking_id)
        await session.rollback()
        raise


def _validate_status_transition(current: BookingStatus, target: BookingStatus) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ConflictError(
            f"Invalid status transition from {current.value} to {target.value}"
        )


async def booking_exists(session: AsyncSession, booking_id: uuid.UUID) -> bool:
    stmt = select(exists().where(Booking.id == booking_id))
    return bool((await session.execute(stmt)).scalar())


async def get_booking(session: AsyncSession, booking_id: uuid.UUID) -> BookingDetail | None:
    booking = await _load_booking(session, booking_id)
    return booking_to_detail(booking) if booking is not None else None


async def list_bookings_for_guest(
    session: AsyncSession, guest_id: uuid.UUID
) -> list[BookingSummary]:
    stmt = _newest_first(_base_booking_query().where(Booking.guest_id == guest_id))
    result = await session.execute(stmt)
    return [booking_to_summary(booking) for booking in result.scalars().unique().all()]


async def list_bookings_for_accommodation(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> list[BookingSummary]:
    stmt = _newest_first(
        _base_booking_query().where(Booking.accommodation_id == accommodation_id)
    )
    result = await session.execute(stmt)
    return [booking_to_summary(booking) for booking in result.scalars().unique().all()]


async def search_bookings(
    session: AsyncSession, filters: BookingFilter
) -> PagedResult[BookingSummary]:
    """Page through bookings matching the optional filters, newest first."""
    conditions = []
    if filters.status is not None:
        conditions.append(Booking.status == filters.status)
    if filters.from_date is not None:
        conditions.append(Booking.check_in_date >= filters.from_date)
    if filters.to_date is not None:
        conditions.append(Booking.check_out_date <= filters.to_date)
    if filters.guest_id is not None:
        conditions.append(Booking.guest_id == filters.guest_id)
    if filters.accommodation_id is not None:
        conditions.append(Booking.accommodation_id == filters.accommodation_id)

    page_number = max(filters.page_number, 1)
    page_size = max(filters.page_size, 1)

    count_stmt = select(func.count()).select_from(Booking).where(*conditions)
    total_count = (await session.execute(count_stmt)).scalar_one()

    stmt = (
        _newest_first(_base_booking_query().where(*conditions))
        .offset((page_number - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(stmt)
    return PagedResult[BookingSummary](
        items=[booking_to_summary(booking) for booking in result.scalars().unique().all()],
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
    )


async def create_booking(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    guest_id: uuid.UUID,
    check_in: date,
    check_out: date,
    guest_count: int,
    special_requests: str | None = None,
    today: date | None = None,
) -> BookingDetail:
    """Book a stay, priced from the covering period or the base price.

    Raises ``ValidationFailed`` for malformed input or too many guests,
    ``NotFoundError`` for an unknown accommodation or guest and
    ``ConflictError`` when the dates are not available.
    """
    raise_for_violations(
        validate_booking_create(
            check_in=check_in,
            check_out=check_out,
            guest_count=guest_count,
            special_requests=special_requests,
        )
    )

    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        raise NotFoundError(f"Accommodation {accommodation_id} not found")
    if await session.get(Guest, guest_id) is None:
        raise NotFoundError(f"Guest {guest_id} not found")

    raise_for_violations(validate_occupancy(guest_count, accommodation.max_occupancy))

    if not await is_available(
        session,
        accommodation_id=accommodation_id,
        check_in=check_in,
        check_out=check_out,
        today=today,
    ):
        raise ConflictError(UNAVAILABLE_MESSAGE)

    quote = await pricing_service.quote_stay(
        session,
        accommodation=accommodation,
        check_in=check_in,
        check_out=check_out,
    )
    booking = Booking(
        id=uuid.uuid4(),
        accommodation_id=accommodation_id,
        guest_id=guest_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guest_count=guest_count,
        total_price=quote.total,
        is_paid=False,
        status=BookingStatus.CONFIRMED,
        special_requests=special_requests,
        booking_date=utcnow(),
    )
    session.add(booking)
    await _commit(session, action="create", booking_id=booking.id)
    logger.info(
        "Booking %s created for accommodation %s (%s to %s, %s nights at %s)",
        booking.id,
        accommodation_id,
        check_in,
        check_out,
        quote.nights,
        quote.nightly_rate,
    )
    return booking_to_detail(await _require_booking(session, booking.id))


async def update_booking(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    check_in: date | None = None,
    check_out: date | None = None,
    guest_count: int | None = None,
    status: BookingStatus | None = None,
    special_requests: str | None = None,
    today: date | None = None,
) -> BookingDetail:
    """Apply the provided changes; absent fields are left untouched.

    A changed date range is re-checked for availability (ignoring this
    booking) and re-priced.
    """
    raise_for_violations(
        validate_booking_update(guest_count=guest_count, special_requests=special_requests)
    )
    booking = await _require_booking(session, booking_id)

    new_check_in = check_in or booking.check_in_date
    new_check_out = check_out or booking.check_out_date
    dates_changed = (new_check_in, new_check_out) != (
        booking.check_in_date,
        booking.check_out_date,
    )
    if dates_changed:
        raise_for_violations(validate_stay_dates(new_check_in, new_check_out))

    if status is not None:
        _validate_status_transition(booking.status, status)

    if guest_count is not None:
        raise_for_violations(
            validate_occupancy(guest_count, booking.accommodation.max_occupancy)
        )

    if dates_changed:
        if not await is_available(
            session,
            accommodation_id=booking.accommodation_id,
            check_in=new_check_in,
            check_out=new_check_out,
            exclude_booking_id=booking.id,
            today=today,
        ):
            raise ConflictError(UNAVAILABLE_MESSAGE)
        quote = await pricing_service.quote_stay(
            session,
            accommodation=booking.accommodation,
            check_in=new_check_in,
            check_out=new_check_out,
        )
        booking.check_in_date = new_check_in
        booking.check_out_date = new_check_out
        booking.total_price = quote.total

    if guest_count is not None:
        booking.guest_count = guest_count
    if special_requests is not None:
        booking.special_requests = special_requests
    if status is not None and status != booking.status:
        booking.status = status
        if status == BookingStatus.CANCELLED and booking.cancellation_date is None:
            booking.cancellation_date = utcnow()

    await _commit(session, action="update", booking_id=booking.id)
    logger.info("Booking %s updated (status=%s)", booking.id, booking.status.value)
    return booking_to_detail(await _require_booking(session, booking.id))


async def cancel_booking(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    reason: str,
) -> BookingDetail:
    """Cancel a booking. Cancelling it again keeps the first date and reason."""
    raise_for_violations(validate_cancellation(reason))
    booking = await _require_booking(session, booking_id)

    if booking.status == BookingStatus.CANCELLED:
        return booking_to_detail(booking)
    _validate_status_transition(booking.status, BookingStatus.CANCELLED)

    booking.status = BookingStatus.CANCELLED
    booking.cancellation_date = utcnow()
    booking.cancellation_reason = reason
    await _commit(session, action="cancel", booking_id=booking.id)
    logger.info("Booking %s cancelled", booking.id)
    return booking_to_detail(await _require_booking(session, booking.id))


__all__ = [
    "booking_exists",
    "cancel_booking",
    "create_booking",
    "get_booking",
    "list_bookings_for_accommodation",
    "list_bookings_for_guest",
    "search_bookings",
    "update_booking",
]
