"""Accommodation and availability period management."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.core.errors import ConflictError, NotFoundError, raise_for_violations
from holidaylets.mapping import (
    accommodation_from_create,
    accommodation_to_detail,
    apply_accommodation_fields,
    period_from_create,
    period_to_read,
)
from holidaylets.models.accommodation import Accommodation
from holidaylets.models.availability import AvailabilityPeriod
from holidaylets.models.booking import Booking
from holidaylets.models.review import Review
from holidaylets.schemas.accommodation import (
    AccommodationCreate,
    AccommodationDetail,
    AccommodationPatch,
    AvailabilityPeriodCreate,
    AvailabilityPeriodRead,
)
from holidaylets.services.review_service import approved_reviews_query
from holidaylets.validation import (
    validate_accommodation,
    validate_accommodation_patch,
    validate_availability_period,
)

logger = logging.getLogger(__name__)


def _periods_query(accommodation_id: uuid.UUID):
    return (
        select(AvailabilityPeriod)
        .where(AvailabilityPeriod.accommodation_id == accommodation_id)
        .order_by(AvailabilityPeriod.start_date.asc(), AvailabilityPeriod.end_date.asc())
    )


async def _commit(session: AsyncSession, *, action: str, accommodation_id: uuid.UUID) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Accommodation %s rejected by the database (%s)", accommodation_id, action)
        raise ConflictError(f"Could not {action} accommodation: conflicting data") from exc
    except SQLAlchemyError:
        logger.exception("Failed to %s accommodation %s", action, accommodation_id)
        await session.rollback()
        raise


async def get_accommodation(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> Accommodation | None:
    """Fetch the accommodation row, e.g. for ownership checks."""
    return await session.get(Accommodation, accommodation_id)


async def accommodation_exists(session: AsyncSession, accommodation_id: uuid.UUID) -> bool:
    stmt = select(exists().where(Accommodation.id == accommodation_id))
    return bool((await session.execute(stmt)).scalar())


async def get_accommodation_detail(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> AccommodationDetail | None:
    """Return the full listing with approved reviews and availability periods."""
    accommodation = await session.get(
        Accommodation, accommodation_id, populate_existing=True
    )
    if accommodation is None:
        return None
    reviews = (await session.execute(approved_reviews_query(accommodation_id))).scalars()
    periods = (await session.execute(_periods_query(accommodation_id))).scalars()
    return accommodation_to_detail(
        accommodation, reviews=reviews.all(), periods=periods.all()
    )


async def _detail_or_raise(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> AccommodationDetail:
    detail = await get_accommodation_detail(session, accommodation_id)
    if detail is None:
        raise NotFoundError(f"Accommodation {accommodation_id} not found")
    return detail


async def create_accommodation(
    session: AsyncSession,
    *,
    owner_id: uuid.UUID,
    payload: AccommodationCreate,
) -> AccommodationDetail:
    raise_for_violations(validate_accommodation(payload))
    accommodation = accommodation_from_create(payload, owner_id=owner_id)
    accommodation.id = uuid.uuid4()
    session.add(accommodation)
    await _commit(session, action="create", accommodation_id=accommodation.id)
    logger.info("Accommodation %s created by %s", accommodation.id, owner_id)
    return await _detail_or_raise(session, accommodation.id)


async def replace_accommodation(
    session: AsyncSession,
    *,
    accommodation: Accommodation,
    payload: AccommodationCreate,
) -> AccommodationDetail:
    """Overwrite every editable field (PUT semantics)."""
    raise_for_violations(validate_accommodation(payload))
    apply_accommodation_fields(accommodation, payload.model_dump())
    await _commit(session, action="replace", accommodation_id=accommodation.id)
    return await _detail_or_raise(session, accommodation.id)


async def patch_accommodation(
    session: AsyncSession,
    *,
    accommodation: Accommodation,
    payload: AccommodationPatch,
) -> AccommodationDetail:
    """Apply only the fields present in the payload (PATCH semantics)."""
    raise_for_violations(validate_accommodation_patch(payload))
    apply_accommodation_fields(accommodation, payload.model_dump(exclude_unset=True))
    await _commit(session, action="update", accommodation_id=accommodation.id)
    return await _detail_or_raise(session, accommodation.id)


async def delete_accommodation(
    session: AsyncSession, *, accommodation: Accommodation
) -> None:
    """Delete a listing with its periods and amenities.

    Listings that have bookings or reviews are kept; ``ConflictError`` is
    raised instead.
    """
    has_dependents = await session.execute(
        select(
            exists().where(Booking.accommodation_id == accommodation.id),
            exists().where(Review.accommodation_id == accommodation.id),
        )
    )
    has_bookings, has_reviews = has_dependents.one()
    if has_bookings or has_reviews:
        raise ConflictError(
            "Accommodation has bookings or reviews and cannot be deleted"
        )

    accommodation_id = accommodation.id
    await session.execute(
        delete(AvailabilityPeriod).where(
            AvailabilityPeriod.accommodation_id == accommodation_id
        )
    )
    await session.delete(accommodation)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Accommodation %s delete rejected by the database", accommodation_id)
        raise ConflictError(
            "Accommodation has bookings or reviews and cannot be deleted"
        ) from exc
    logger.info("Accommodation %s deleted", accommodation_id)


async def add_availability_period(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    payload: AvailabilityPeriodCreate,
) -> AvailabilityPeriodRead:
    raise_for_violations(validate_availability_period(payload))
    if not await accommodation_exists(session, accommodation_id):
        raise NotFoundError(f"Accommodation {accommodation_id} not found")
    period = period_from_create(payload, accommodation_id=accommodation_id)
    session.add(period)
    await _commit(session, action="add a period to", accommodation_id=accommodation_id)
    await session.refresh(period)
    return period_to_read(period)


async def list_availability_periods(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> list[AvailabilityPeriodRead]:
    if not await accommodation_exists(session, accommodation_id):
        raise NotFoundError(f"Accommodation {accommodation_id} not found")
    result = await session.execute(_periods_query(accommodation_id))
    return [period_to_read(period) for period in result.scalars().all()]


__all__ = [
    "accommodation_exists",
    "add_availability_period",
    "create_accommodation",
    "delete_accommodation",
    "get_accommodation",
    "get_accommodation_detail",
    "list_availability_periods",
    "patch_accommodation",
    "replace_accommodation",
]
