"""Guest reviews and the rating aggregate kept on each accommodation."""
from __future__ import annotations

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import Select, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from holidaylets.core.errors import ConflictError, NotFoundError, raise_for_violations
from holidaylets.mapping import review_to_read
from holidaylets.models.accommodation import Accommodation
from holidaylets.models.booking import Booking, BookingStatus
from holidaylets.models.review import Review
from holidaylets.schemas.review import ReviewRead
from holidaylets.validation import validate_review

logger = logging.getLogger(__name__)

RATING_PLACES = Decimal("0.01")


def approved_reviews_query(accommodation_id: uuid.UUID) -> Select[tuple[Review]]:
    """Approved reviews of one accommodation, newest first, with guests loaded."""
    return (
        select(Review)
        .options(selectinload(Review.guest))
        .where(Review.accommodation_id == accommodation_id, Review.is_approved.is_(True))
        .order_by(Review.review_date.desc(), Review.id.asc())
    )


async def _refresh_rating(session: AsyncSession, accommodation_id: uuid.UUID) -> None:
    stmt = select(func.avg(Review.rating), func.count(Review.id)).where(
        Review.accommodation_id == accommodation_id, Review.is_approved.is_(True)
    )
    average, count = (await session.execute(stmt)).one()
    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        return
    accommodation.review_count = count
    accommodation.average_rating = (
        Decimal(str(average)).quantize(RATING_PLACES, rounding=ROUND_HALF_UP)
        if average is not None
        else None
    )


async def _load_review(session: AsyncSession, review_id: uuid.UUID) -> Review | None:
    stmt = (
        select(Review)
        .options(selectinload(Review.guest))
        .where(Review.id == review_id)
        .execution_options(populate_existing=True)
    )
    return (await session.execute(stmt)).scalar_one_or_none()


async def list_reviews_for_accommodation(
    session: AsyncSession, accommodation_id: uuid.UUID
) -> list[ReviewRead]:
    if await session.get(Accommodation, accommodation_id) is None:
        raise NotFoundError(f"Accommodation {accommodation_id} not found")
    result = await session.execute(approved_reviews_query(accommodation_id))
    return [review_to_read(review) for review in result.scalars().all()]


async def create_review(
    session: AsyncSession,
    *,
    booking_id: uuid.UUID,
    rating: int,
    comment: str | None = None,
) -> ReviewRead:
    """Review a completed stay; each booking can be reviewed once."""
    raise_for_violations(validate_review(rating, comment))

    booking = await session.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    if booking.status != BookingStatus.COMPLETED:
        raise ConflictError("Only completed stays can be reviewed")
    already_reviewed = await session.execute(
        select(exists().where(Review.booking_id == booking_id))
    )
    if already_reviewed.scalar():
        raise ConflictError("This booking has already been reviewed")

    review = Review(
        id=uuid.uuid4(),
        accommodation_id=booking.accommodation_id,
        guest_id=booking.guest_id,
        booking_id=booking.id,
        rating=rating,
        comment=comment,
        is_approved=True,
    )
    session.add(review)
    await _refresh_rating(session, booking.accommodation_id)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("This booking has already been reviewed") from exc
    logger.info("Review %s added for booking %s", review.id, booking_id)
    return review_to_read(await _load_review(session, review.id))


async def set_review_approval(
    session: AsyncSession, *, review_id: uuid.UUID, is_approved: bool
) -> ReviewRead:
    review = await _load_review(session, review_id)
    if review is None:
        raise NotFoundError(f"Review {review_id} not found")
    review.is_approved = is_approved
    await _refresh_rating(session, review.accommodation_id)
    await session.commit()
    return review_to_read(await _load_review(session, review_id))


__all__ = [
    "approved_reviews_query",
    "create_review",
    "list_reviews_for_accommodation",
    "set_review_approval",
]
