"""Date-range overlap checks for accommodations.

A stay is bookable when one available period covers it end to end and no
live booking overlaps it. Turnover days (a check-out on the same date as a
check-in) are not overlaps.
"""
from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import ColumnElement, and_, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.models.accommodation import Accommodation
from holidaylets.models.availability import AvailabilityPeriod
from holidaylets.models.booking import Booking, BookingStatus

_BLOCKING_EXCLUDED_STATUSES = {BookingStatus.CANCELLED}


def _today() -> date:
    return datetime.now(UTC).date()


def covering_period_clause(
    accommodation_id: uuid.UUID, check_in: date, check_out: date
) -> ColumnElement[bool]:
    """Available periods that contain the whole stay on their own."""
    return and_(
        AvailabilityPeriod.accommodation_id == accommodation_id,
        AvailabilityPeriod.is_available.is_(True),
        AvailabilityPeriod.start_date <= check_in,
        AvailabilityPeriod.end_date >= check_out,
    )


def overlap_clause(check_in: date, check_out: date) -> ColumnElement[bool]:
    """Bookings whose stay collides with ``[check_in, check_out)``."""
    return or_(
        and_(Booking.check_in_date <= check_in, Booking.check_out_date > check_in),
        and_(Booking.check_in_date < check_out, Booking.check_out_date >= check_out),
        and_(Booking.check_in_date >= check_in, Booking.check_out_date <= check_out),
    )


def blocking_bookings_clause(
    accommodation_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> ColumnElement[bool]:
    conditions = [
        Booking.accommodation_id == accommodation_id,
        Booking.status.not_in(_BLOCKING_EXCLUDED_STATUSES),
        overlap_clause(check_in, check_out),
    ]
    if exclude_booking_id is not None:
        conditions.append(Booking.id != exclude_booking_id)
    return and_(*conditions)


async def is_available(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_booking_id: uuid.UUID | None = None,
    today: date | None = None,
) -> bool:
    """Return whether the accommodation can take a stay over the given dates.

    ``exclude_booking_id`` ignores one booking, so an existing booking can be
    moved without colliding with itself. ``today`` defaults to the current UTC
    date; stays starting earlier are never available.
    """
    if check_in >= check_out:
        return False
    if check_in < (today or _today()):
        return False

    if await session.get(Accommodation, accommodation_id) is None:
        return False

    stmt = select(
        exists().where(covering_period_clause(accommodation_id, check_in, check_out)),
        exists().where(
            blocking_bookings_clause(
                accommodation_id, check_in, check_out, exclude_booking_id
            )
        ),
    )
    covered, blocked = (await session.execute(stmt)).one()
    return bool(covered) and not bool(blocked)


__all__ = [
    "blocking_bookings_clause",
    "covering_period_clause",
    "is_available",
    "overlap_clause",
]
