"""Availability periods for accommodations."""
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from holidaylets.db.base import Base


class AvailabilityPeriod(Base):
    """Inclusive date range during which an accommodation is (or is not) bookable."""

    __tablename__ = "availability_periods"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_availability_dates"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price_per_night_override: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    minimum_stay_nights: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(String(100))
