"""User and token schemas."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from holidaylets.models.user import UserRole


class UserCreate(BaseModel):
    """Payload for creating a user."""

    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str
    last_name: str
    role: UserRole = UserRole.OWNER


class UserRead(BaseModel):
    """Serialized user response."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Response body for access tokens."""

    access_token: str
    token_type: str = "bearer"
