from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from src.toggly.api.middlewares import setup_middlewares
from src.toggly.api.v1.router import build_api_router
from src.toggly.core.config import get_settings
from src.toggly.core.db import dispose_engine, run_migrations_async
from src.toggly.core.exceptions import setup_exception_handlers
from src.toggly.core.logging import get_logger, setup_logging
from src.toggly.core.redis import cache_enabled, close_redis, get_redis
from src.toggly.storage import MemoryDataStorage

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        f"Starting {settings.app_name}",
        version=settings.app_version,
        storage=settings.storage_backend,
        base_path=settings.api_base_path,
    )

    if settings.storage_backend == "sql" and settings.auto_migrate:
        logger.info("Applying database migrations")
        await run_migrations_async()

    # Connect eagerly so a misconfigured cache shows up in the startup log
    await get_redis()
    logger.info("Startup complete", read_cache=cache_enabled())

    yield

    logger.info("Closing connections...")
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Owner-scoped projects"},
    {"name": "environments", "description": "Environments inside a project"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Toggly core API: owner-scoped projects and environments",
        version=settings.app_version,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Backing store for STORAGE_BACKEND=memory; unused with the SQL backend
    app.state.memory_storage = MemoryDataStorage()

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(build_api_router(settings.api_base_path))

    # Prometheus metrics; /metrics sits behind the same token and owner gates
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    return app


app = create_app()
