"""Root test fixtures shared across all test types.

Unit and API tests run on the in-memory storage backend. Database-specific
fixtures are in tests/integration/conftest.py.
"""

import os

# Set test configuration before any app imports
os.environ.setdefault("AUTH_TOKEN", "TestToken")
os.environ.setdefault("APP_VERSION", "test")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["REDIS_URL"] = ""

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Iterator

import pytest
from fakeredis import aioredis as fakeredis_aio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from redis.asyncio import Redis

from src.toggly.api.headers import AUTH_HEADER, OWNER_HEADER
from src.toggly.core import redis as redis_core
from src.toggly.core.config import get_settings
from src.toggly.main import create_app
from src.toggly.services import Engine, ProjectAPI
from src.toggly.storage import MemoryDataStorage
from tests.helpers import TEST_OWNER

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def auth_token() -> str:
    return get_settings().auth_token


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Headers of an authenticated request from TEST_OWNER."""
    return {AUTH_HEADER: auth_token, OWNER_HEADER: TEST_OWNER}


# --- Engine fixtures ---


@pytest.fixture
def memory_storage() -> MemoryDataStorage:
    return MemoryDataStorage()


@pytest.fixture
def projects(memory_storage: MemoryDataStorage) -> ProjectAPI:
    """Project API of TEST_OWNER over a fresh in-memory store."""
    return Engine(memory_storage).for_owner(TEST_OWNER).projects()


# --- HTTP fixtures ---


@pytest.fixture
def app() -> FastAPI:
    """Fresh application; each one owns a fresh in-memory store."""
    return create_app()


@pytest.fixture
async def client(app: FastAPI, auth_headers: dict[str, str]) -> AsyncGenerator[AsyncClient]:
    """Client sending the auth token and owner header on every request."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers,
    ) as client:
        yield client


@pytest.fixture
async def raw_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client without default headers, for auth and owner checks."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# --- Redis Test Fixtures ---


@pytest.fixture(autouse=True)
def _reset_redis_state() -> Iterator[None]:
    redis_core.reset_redis_state()
    yield
    redis_core.reset_redis_state()


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """In-memory Redis implementation, no server needed."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> Redis:
    """Patches get_redis() to return the fakeredis client.

    Patches both the redis module and the storage dependency that imports it.
    """

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.toggly.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.toggly.api.dependencies.storage.get_redis", _get_fake_redis)
    return fake_redis
