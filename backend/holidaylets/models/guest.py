"""Guest model."""
from __future__ import annotations

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from holidaylets.db.base import Base
from holidaylets.models.mixins import CreatedAtMixin


class Guest(CreatedAtMixin, Base):
    """A person who books stays. Not necessarily a platform user."""

    __tablename__ = "guests"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    address: Mapped[str | None] = mapped_column(String(250))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
