"""User endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.api import deps
from holidaylets.api.errors import http_error
from holidaylets.core.errors import DomainError
from holidaylets.models.user import User, UserRole
from holidaylets.schemas.user import UserCreate, UserRead
from holidaylets.security.permissions import require_roles
from holidaylets.services import user_service

router = APIRouter()


@router.get("/me", response_model=UserRead, summary="Current user")
async def read_current_user(
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    payload: UserCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    """Create an owner, staff or admin account (admins only)."""
    require_roles(current_user, {UserRole.ADMIN})
    try:
        user = await user_service.create_user(session, payload)
    except DomainError as exc:
        raise http_error(exc) from exc
    return UserRead.model_validate(user)
