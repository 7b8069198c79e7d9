"""Review schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class ReviewCreate(BaseModel):
    """Payload for reviewing a completed stay."""

    rating: int
    comment: str | None = None


class ReviewRead(BaseModel):
    """Serialized review."""

    id: uuid.UUID
    accommodation_id: uuid.UUID
    booking_id: uuid.UUID
    rating: int
    comment: str | None = None
    is_approved: bool
    review_date: datetime
    guest_name: str


class ReviewApprovalUpdate(BaseModel):
    """Moderation payload."""

    is_approved: bool
