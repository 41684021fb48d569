"""Integration test fixtures for the SQL storage backend.

These fixtures require a PostgreSQL database reachable at DATABASE_URL.
Tests are skipped when it is not available.
"""

import asyncio
import secrets
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.toggly.core.config import get_settings
from src.toggly.core.db import get_session, run_migrations_sync
from src.toggly.models import Environment, Project
from src.toggly.storage import SqlDataStorage


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    try:
        async with test_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        await test_engine.dispose()
        pytest.skip(f"PostgreSQL not available: {e}")

    await asyncio.to_thread(run_migrations_sync)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def owner_id() -> str:
    """Unique owner per test so runs never see each other's rows."""
    return f"it_{secrets.token_hex(6)}"


@pytest.fixture
async def db_session(engine: AsyncEngine, owner_id: str) -> AsyncGenerator[AsyncSession]:
    """Session for the test; rows of the test's owner are removed afterwards."""
    async with get_session(engine) as session:
        yield session

    async with engine.begin() as conn:
        await conn.execute(delete(Environment).where(Environment.owner_id == owner_id))  # type: ignore[arg-type]
        await conn.execute(delete(Project).where(Project.owner_id == owner_id))  # type: ignore[arg-type]


@pytest.fixture
def sql_storage(db_session: AsyncSession) -> SqlDataStorage:
    return SqlDataStorage(db_session)
