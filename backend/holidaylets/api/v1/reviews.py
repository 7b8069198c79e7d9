"""Review moderation endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from holidaylets.api import deps
from holidaylets.api.errors import http_error
from holidaylets.core.errors import DomainError
from holidaylets.models.user import User, UserRole
from holidaylets.schemas.review import ReviewApprovalUpdate, ReviewRead
from holidaylets.security.permissions import require_roles
from holidaylets.services import review_service

router = APIRouter()


@router.patch(
    "/{review_id}/approval",
    response_model=ReviewRead,
    summary="Approve or hide a review",
)
async def set_review_approval(
    review_id: uuid.UUID,
    payload: ReviewApprovalUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> ReviewRead:
    require_roles(current_user, {UserRole.ADMIN})
    try:
        return await review_service.set_review_approval(
            session, review_id=review_id, is_approved=payload.is_approved
        )
    except DomainError as exc:
        raise http_error(exc) from exc
