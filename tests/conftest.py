import os
import sys

# Project root on sys.path so `import athletehub` works without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment: in-memory SQLite; must be set before athletehub.config is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from typing import AsyncGenerator, Optional

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from athletehub.core.auth.security import create_access_token
from athletehub.core.users.models import User
from athletehub.db.base import async_session_context, create_db_and_tables, drop_db_and_tables, engine


@pytest_asyncio.fixture(scope="function", autouse=True)
async def setup_db():
    await create_db_and_tables()
    yield
    await drop_db_and_tables()
    # Each test runs on its own event loop, don't carry the connection over
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_context() as session:
        yield session


async def add_user(
    user_id: str,
    role: str = "Player",
    sport: Optional[str] = "cricket",
    username: Optional[str] = None,
) -> User:
    """Insert a user in its own committed transaction."""
    async with async_session_context() as session:
        user = User(id=user_id, username=username or user_id, role=role, sport=sport)
        session.add(user)
    return user


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'user_id': user_id})}"}


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    from athletehub.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
