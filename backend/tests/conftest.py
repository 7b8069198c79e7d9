"""Test fixtures for the holiday lets backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from holidaylets.core.config import get_settings
from holidaylets.core.security import get_password_hash
from holidaylets.db.base import Base
from holidaylets.db.session import dispose_engine, get_sessionmaker
from holidaylets.main import app
from holidaylets.models import User, UserRole


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(reset_database: None, db_url: str) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus seeded admin, owner and staff users."""
    sessionmaker = get_sessionmaker(db_url)
    users = {
        "admin": ("admin@example.com", "Adm1nPass!", UserRole.ADMIN),
        "owner": ("owner@example.com", "0wnerPass!", UserRole.OWNER),
        "other_owner": ("other.owner@example.com", "0therPass!", UserRole.OWNER),
        "staff": ("staff@example.com", "St4ffPass!", UserRole.STAFF),
    }

    context: dict[str, object] = {}
    async with sessionmaker() as session:
        for key, (email, password, role) in users.items():
            user = User(
                email=email,
                hashed_password=get_password_hash(password),
                first_name=key.replace("_", " ").title(),
                last_name="Tester",
                role=role,
                is_active=True,
            )
            session.add(user)
            await session.flush()
            context[f"{key}_id"] = user.id
            context[f"{key}_email"] = email
            context[f"{key}_password"] = password
        await session.commit()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
