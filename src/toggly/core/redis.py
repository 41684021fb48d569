"""Shared Redis client backing the optional read cache.

The cache is enabled only while ``get_redis()`` hands out a client. With no
``REDIS_URL``, or when the first ping fails, it returns None and requests read
straight from storage until ``close_redis()`` resets the state.
"""

from redis.asyncio import ConnectionPool, Redis

from src.toggly.core.config import get_settings
from src.toggly.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def _discard(client: Redis | None, pool: ConnectionPool | None) -> None:
    if client is not None:
        await client.aclose()
    if pool is not None:
        await pool.disconnect()


async def get_redis() -> Redis | None:
    """Client for the read cache, or None when the cache is disabled."""
    global _pool, _redis, _connection_attempted

    if _redis is not None or _connection_attempted:
        return _redis
    _connection_attempted = True

    settings = get_settings()
    if not settings.redis_url:
        logger.info("Read cache disabled", reason="REDIS_URL not set")
        return None

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    client = Redis(connection_pool=pool)
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Read cache disabled", reason="Redis unreachable", error=str(e))
        await _discard(client, pool)
        return None

    _pool, _redis = pool, client
    logger.info("Read cache enabled", ttl_seconds=settings.cache_ttl_seconds)
    return _redis


def cache_enabled() -> bool:
    """Whether the last ``get_redis()`` call produced a client."""
    return _redis is not None


async def close_redis() -> None:
    """Close the client and allow a fresh connection attempt. Called on shutdown."""
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        logger.info("Closing read cache connection")
    await _discard(_redis, _pool)
    _redis = None
    _pool = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the current client without closing it. For tests."""
    global _pool, _redis, _connection_attempted
    _redis = None
    _pool = None
    _connection_attempted = False
