"""Cache-aside decorator over any DataStorage.

Reads (``list``/``get``) are served from Redis when present and filled from
the wrapped storage otherwise. Every write goes to the wrapped storage first
and then drops the cached list and item keys it affects. Redis errors never
fail a request: reads fall through to storage, failed invalidations are
logged and bounded by the TTL. Because a stale entry can outlive a failed
invalidation, ``primary()`` hands out the wrapped storage for reads that
guard a mutation.

Key layout::

    toggly:{owner}:projects
    toggly:{owner}:project:{code}
    toggly:{owner}:project:{code}:environments
    toggly:{owner}:project:{code}:environment:{env_code}

Owner ids and codes are percent-encoded, so a segment never contains ``:``.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar
from urllib.parse import quote

from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlmodel import SQLModel

from src.toggly.core.logging import get_logger
from src.toggly.models import Environment, Project
from src.toggly.storage.base import DataStorage, EnvironmentStorage, ProjectStorage

logger = get_logger(__name__)

CACHE_PREFIX = "toggly"


def key_segment(value: str) -> str:
    return quote(value, safe="")


ModelType = TypeVar("ModelType", bound=SQLModel)


class _CachedEntities(Generic[ModelType]):
    """Shared cache-aside logic for one scoped collection."""

    model: type[ModelType]
    list_suffix: str
    item_suffix: str

    def __init__(self, redis: Redis, ttl: int, namespace: str):
        self.redis = redis
        self.ttl = ttl
        self.namespace = namespace

    @property
    def list_key(self) -> str:
        return f"{self.namespace}:{self.list_suffix}"

    def item_key(self, code: str) -> str:
        return f"{self.namespace}:{self.item_suffix}:{key_segment(code)}"

    async def _read(self, key: str) -> str | None:
        try:
            return await self.redis.get(key)
        except RedisError as e:
            logger.warning("Cache read failed", key=key, error=str(e))
            return None

    async def _write(self, key: str, payload: object) -> None:
        try:
            await self.redis.setex(key, self.ttl, json.dumps(payload))
        except RedisError as e:
            logger.warning("Cache write failed", key=key, error=str(e))

    async def invalidate(self, code: str) -> None:
        try:
            await self.redis.delete(self.list_key, self.item_key(code))
        except RedisError as e:
            logger.warning("Cache invalidation failed", namespace=self.namespace, error=str(e))

    async def cached_list(
        self, load: Callable[[], Awaitable[list[ModelType]]]
    ) -> list[ModelType]:
        raw = await self._read(self.list_key)
        if raw is not None:
            return [self.model.model_validate(item) for item in json.loads(raw)]
        items = await load()
        await self._write(self.list_key, [item.model_dump(mode="json") for item in items])
        return items

    async def cached_get(
        self, code: str, load: Callable[[str], Awaitable[ModelType | None]]
    ) -> ModelType | None:
        raw = await self._read(self.item_key(code))
        if raw is not None:
            return self.model.model_validate(json.loads(raw))
        item = await load(code)
        # Misses are not cached so a later create is visible immediately.
        if item is not None:
            await self._write(self.item_key(code), item.model_dump(mode="json"))
        return item


class CachedDataStorage:
    """Wraps a DataStorage; created per request around the request's storage."""

    def __init__(self, inner: DataStorage, redis: Redis, ttl: int):
        self.inner = inner
        self.redis = redis
        self.ttl = ttl

    def for_owner(self, owner_id: str) -> "CachedProjectStorage":
        return CachedProjectStorage(
            self.inner.for_owner(owner_id),
            self.redis,
            self.ttl,
            f"{CACHE_PREFIX}:{key_segment(owner_id)}",
        )


class CachedProjectStorage(_CachedEntities[Project]):
    model = Project
    list_suffix = "projects"
    item_suffix = "project"

    def __init__(self, inner: ProjectStorage, redis: Redis, ttl: int, namespace: str):
        super().__init__(redis, ttl, namespace)
        self.inner = inner

    async def list(self) -> list[Project]:
        return await self.cached_list(self.inner.list)

    async def get(self, code: str) -> Project | None:
        return await self.cached_get(code, self.inner.get)

    async def save(self, project: Project) -> Project:
        saved = await self.inner.save(project)
        await self.invalidate(project.code)
        return saved

    async def replace(self, project: Project) -> Project:
        replaced = await self.inner.replace(project)
        await self.invalidate(project.code)
        return replaced

    async def delete(self, code: str) -> None:
        await self.inner.delete(code)
        await self.invalidate(code)

    def for_project(self, code: str) -> "CachedProjectScope":
        return CachedProjectScope(
            self.inner.for_project(code).environments(),
            self.redis,
            self.ttl,
            self.item_key(code),
        )

    def primary(self) -> ProjectStorage:
        return self.inner.primary()


class CachedProjectScope:
    def __init__(self, inner: EnvironmentStorage, redis: Redis, ttl: int, namespace: str):
        self._environments = CachedEnvironmentStorage(inner, redis, ttl, namespace)

    def environments(self) -> "CachedEnvironmentStorage":
        return self._environments


class CachedEnvironmentStorage(_CachedEntities[Environment]):
    model = Environment
    list_suffix = "environments"
    item_suffix = "environment"

    def __init__(self, inner: EnvironmentStorage, redis: Redis, ttl: int, namespace: str):
        super().__init__(redis, ttl, namespace)
        self.inner = inner

    async def list(self) -> list[Environment]:
        return await self.cached_list(self.inner.list)

    async def get(self, code: str) -> Environment | None:
        return await self.cached_get(code, self.inner.get)

    async def save(self, environment: Environment) -> Environment:
        saved = await self.inner.save(environment)
        await self.invalidate(environment.code)
        return saved

    async def replace(self, environment: Environment) -> Environment:
        replaced = await self.inner.replace(environment)
        await self.invalidate(environment.code)
        return replaced

    async def delete(self, code: str) -> None:
        await self.inner.delete(code)
        await self.invalidate(code)

    def primary(self) -> EnvironmentStorage:
        return self.inner.primary()
