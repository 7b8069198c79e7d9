"""Guest API endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.api import deps
from holidaylets.api.errors import http_error
from holidaylets.core.errors import DomainError
from holidaylets.mapping import guest_to_read
from holidaylets.models.user import User
from holidaylets.schemas.guest import GuestCreate, GuestRead, GuestUpdate
from holidaylets.services import guest_service

router = APIRouter()


@router.get("", response_model=list[GuestRead], summary="List guests")
async def list_guests(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
    email: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[GuestRead]:
    guests = await guest_service.list_guests(session, email=email, skip=skip, limit=limit)
    return [guest_to_read(guest) for guest in guests]


@router.post(
    "",
    response_model=GuestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create guest",
)
async def create_guest(
    payload: GuestCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> GuestRead:
    try:
        guest = await guest_service.create_guest(session, payload)
    except DomainError as exc:
        raise http_error(exc) from exc
    return guest_to_read(guest)


@router.get("/{guest_id}", response_model=GuestRead, summary="Get guest")
async def read_guest(
    guest_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> GuestRead:
    guest = await guest_service.get_guest(session, guest_id)
    if guest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    return guest_to_read(guest)


@router.patch("/{guest_id}", response_model=GuestRead, summary="Update guest")
async def update_guest(
    guest_id: uuid.UUID,
    payload: GuestUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> GuestRead:
    try:
        guest = await guest_service.update_guest(session, guest_id, payload)
    except DomainError as exc:
        raise http_error(exc) from exc
    return guest_to_read(guest)


@router.delete(
    "/{guest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> None:
    try:
        await guest_service.delete_guest(session, guest_id)
    except DomainError as exc:
        raise http_error(exc) from exc
