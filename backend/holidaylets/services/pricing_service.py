"""Stay pricing for bookings."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.models.accommodation import Accommodation
from holidaylets.models.availability import AvailabilityPeriod
from holidaylets.services.availability_service import covering_period_clause

MONEY_PLACES = Decimal("0.01")


@dataclass(slots=True)
class StayQuote:
    """Price breakdown for one stay."""

    nights: int
    nightly_rate: Decimal
    rate_source: str
    total: Decimal


def _to_money(value: Decimal | float | str) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


async def _override_rate(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    check_in: date,
    check_out: date,
) -> Decimal | None:
    # Narrowest covering period wins: latest start, then earliest end.
    stmt = (
        select(AvailabilityPeriod.price_per_night_override)
        .where(
            covering_period_clause(accommodation_id, check_in, check_out),
            AvailabilityPeriod.price_per_night_override.is_not(None),
        )
        .order_by(
            AvailabilityPeriod.start_date.desc(),
            AvailabilityPeriod.end_date.asc(),
        )
        .limit(1)
    )
    return (await session.execute(stmt)).scalar_one_or_none()


async def quote_stay(
    session: AsyncSession,
    *,
    accommodation: Accommodation,
    check_in: date,
    check_out: date,
) -> StayQuote:
    """Price a stay as nights times the applicable nightly rate."""
    nights = (check_out - check_in).days
    if nights <= 0:
        raise ValueError("Check-out date must be after check-in date")

    override = await _override_rate(
        session,
        accommodation_id=accommodation.id,
        check_in=check_in,
        check_out=check_out,
    )
    if override is not None:
        rate, source = _to_money(override), "period_override"
    else:
        rate, source = _to_money(accommodation.base_price_per_night), "base_price"
    return StayQuote(
        nights=nights,
        nightly_rate=rate,
        rate_source=source,
        total=_to_money(rate * nights),
    )


__all__ = ["MONEY_PLACES", "StayQuote", "quote_stay"]
