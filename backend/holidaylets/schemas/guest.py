"""Guest schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class GuestCreate(BaseModel):
    """Payload for registering a guest."""

    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None = None


class GuestUpdate(BaseModel):
    """Mutable guest fields."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class GuestSummary(BaseModel):
    """Compact guest view embedded in booking details."""

    id: uuid.UUID
    first_name: str
    last_name: str
    full_name: str
    email: str


class GuestRead(GuestCreate):
    """Serialized guest."""

    id: uuid.UUID
    created_at: datetime
