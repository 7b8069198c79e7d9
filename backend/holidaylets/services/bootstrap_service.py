"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from holidaylets.core.config import get_settings
from holidaylets.db.session import get_sessionmaker
from holidaylets.models import UserRole
from holidaylets.schemas.user import UserCreate
from holidaylets.services import user_service

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> None:
    """Create the configured admin user if credentials are set and it is missing."""

    settings = get_settings()
    email = settings.bootstrap_admin_email
    password = settings.bootstrap_admin_password
    if not email or not password:
        return

    async with get_sessionmaker(settings.database_url)() as session:
        if await user_service.get_user_by_email(session, email) is not None:
            return
        payload = UserCreate(
            email=email,
            password=password,
            first_name="Site",
            last_name="Admin",
            role=UserRole.ADMIN,
        )
        await user_service.create_user(session, payload)
        logger.info("Bootstrapped admin user %s", email)
