"""Reusable migration runner for startup and tests."""

import asyncio

from alembic import command
from alembic.config import Config


def run_migrations_sync(config_path: str = "alembic.ini") -> None:
    """Upgrade the database to the latest Alembic revision."""
    alembic_cfg = Config(config_path)
    command.upgrade(alembic_cfg, "head")


async def run_migrations_async(config_path: str = "alembic.ini") -> None:
    """Run Alembic migrations from async context.

    Alembic's env.py drives a sync engine, so it runs in a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync, config_path)
