"""Guest management services."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import Select, exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.core.errors import ConflictError, NotFoundError, raise_for_violations
from holidaylets.mapping import guest_from_create
from holidaylets.models.booking import Booking
from holidaylets.models.guest import Guest
from holidaylets.schemas.guest import GuestCreate, GuestUpdate
from holidaylets.validation import validate_guest, validate_guest_update

logger = logging.getLogger(__name__)


async def list_guests(
    session: AsyncSession,
    *,
    email: str | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Guest]:
    """Return guests alphabetically, optionally matching an e-mail address."""
    stmt: Select[tuple[Guest]] = select(Guest)
    if email:
        stmt = stmt.where(Guest.email == email)
    stmt = (
        stmt.order_by(Guest.last_name.asc(), Guest.first_name.asc(), Guest.id.asc())
        .offset(skip)
        .limit(min(limit, 100))
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_guest(session: AsyncSession, guest_id: uuid.UUID) -> Guest | None:
    return await session.get(Guest, guest_id)


async def _require_guest(session: AsyncSession, guest_id: uuid.UUID) -> Guest:
    guest = await get_guest(session, guest_id)
    if guest is None:
        raise NotFoundError(f"Guest {guest_id} not found")
    return guest


async def _commit(session: AsyncSession, *, action: str, guest_id: uuid.UUID | None) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Guest %s rejected by the database (%s)", guest_id, action)
        raise ConflictError(f"Could not {action} guest: conflicting data") from exc
    except SQLAlchemyError:
        logger.exception("Failed to %s guest %s", action, guest_id)
        await session.rollback()
        raise


async def create_guest(session: AsyncSession, payload: GuestCreate) -> Guest:
    raise_for_violations(validate_guest(payload))
    guest = guest_from_create(payload)
    session.add(guest)
    await _commit(session, action="create", guest_id=guest.id)
    await session.refresh(guest)
    return guest


async def update_guest(
    session: AsyncSession, guest_id: uuid.UUID, payload: GuestUpdate
) -> Guest:
    """Update the fields present in the payload."""
    raise_for_violations(validate_guest_update(payload))
    guest = await _require_guest(session, guest_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(guest, field, value)
    await _commit(session, action="update", guest_id=guest_id)
    await session.refresh(guest)
    return guest


async def delete_guest(session: AsyncSession, guest_id: uuid.UUID) -> None:
    """Delete a guest who has never booked."""
    guest = await _require_guest(session, guest_id)
    has_bookings = await session.execute(
        select(exists().where(Booking.guest_id == guest_id))
    )
    if has_bookings.scalar():
        raise ConflictError("Guest has bookings and cannot be deleted")
    await session.delete(guest)
    await _commit(session, action="delete", guest_id=guest_id)


__all__ = [
    "create_guest",
    "delete_guest",
    "get_guest",
    "list_guests",
    "update_guest",
]
