"""Role helpers for explicit authorization checks."""

from __future__ import annotations

from fastapi import HTTPException, status

from holidaylets.models.accommodation import Accommodation
from holidaylets.models.user import User, UserRole

LISTING_MANAGERS = {UserRole.ADMIN, UserRole.OWNER}


def require_roles(user: User, allowed: set[UserRole]) -> None:
    """Raise HTTP 403 if a user is not a member of the allowed role set."""

    if user.role not in allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


def ensure_can_manage(user: User, accommodation: Accommodation) -> None:
    """Admins manage every listing; owners only their own."""
    require_roles(user, LISTING_MANAGERS)
    if user.role != UserRole.ADMIN and accommodation.owner_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only manage your own listings",
        )


__all__ = ["LISTING_MANAGERS", "ensure_can_manage", "require_roles"]
