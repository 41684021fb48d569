"""Storage dependencies - one storage (and session) per request."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from src.toggly.core.config import get_settings
from src.toggly.core.db import get_session
from src.toggly.core.redis import get_redis
from src.toggly.storage import CachedDataStorage, DataStorage, SqlDataStorage


async def _with_cache(storage: DataStorage) -> DataStorage:
    """Wrap storage in the Redis read cache when Redis is available."""
    redis = await get_redis()
    if redis is None:
        return storage
    return CachedDataStorage(storage, redis, get_settings().cache_ttl_seconds)


async def get_data_storage(request: Request) -> AsyncGenerator[DataStorage]:
    """Get the request's storage.

    For the SQL backend a session is opened here and closed when the request
    ends, whatever the outcome. The memory backend lives on ``app.state``.
    """
    settings = get_settings()
    if settings.storage_backend == "memory":
        yield await _with_cache(request.app.state.memory_storage)
        return

    async with get_session() as session:
        yield await _with_cache(SqlDataStorage(session))


Storage = Annotated[DataStorage, Depends(get_data_storage)]
