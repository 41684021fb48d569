"""SQL storage backend (SQLModel over an AsyncSession).

The session belongs to the caller (one per request, see
``api.dependencies.storage``). Each write commits on its own; nothing here
spans several statements in one transaction.
"""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.toggly.core.errors import NotFoundError, StorageError, UniqueConstraintViolation
from src.toggly.core.logging import get_logger
from src.toggly.models import Environment, Project
from src.toggly.storage.base import environment_key, project_key

logger = get_logger(__name__)


@asynccontextmanager
async def _reading() -> AsyncGenerator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.warning("Storage read failed", error=str(e))
        raise StorageError() from e


@asynccontextmanager
async def _writing(
    session: AsyncSession,
    on_duplicate: Callable[[], UniqueConstraintViolation] | None = None,
) -> AsyncGenerator[None]:
    """Commit the statements issued in the block, rolling back on any failure."""
    try:
        yield
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if on_duplicate is not None:
            raise on_duplicate() from e
        raise StorageError() from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.warning("Storage write failed", error=str(e))
        raise StorageError() from e


class SqlDataStorage:
    """Root accessor bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def for_owner(self, owner_id: str) -> "SqlProjectStorage":
        return SqlProjectStorage(self.session, owner_id)


class SqlProjectStorage:
    def __init__(self, session: AsyncSession, owner_id: str):
        self.session = session
        self.owner_id = owner_id

    async def list(self) -> list[Project]:
        async with _reading():
            result = await self.session.execute(
                select(Project).where(Project.owner_id == self.owner_id).order_by(Project.id)  # type: ignore[arg-type]
            )
            return list(result.scalars().all())

    async def get(self, code: str) -> Project | None:
        async with _reading():
            result = await self.session.execute(
                select(Project).where(Project.owner_id == self.owner_id, Project.code == code)
            )
            return result.scalar_one_or_none()

    async def save(self, project: Project) -> Project:
        row = Project(
            owner_id=self.owner_id,
            code=project.code,
            description=project.description,
            reg_date=project.reg_date,
            status=project.status,
        )
        async with _writing(
            self.session,
            on_duplicate=lambda: UniqueConstraintViolation(
                "Project", project_key(self.owner_id, project.code)
            ),
        ):
            self.session.add(row)
        await self.session.refresh(row)
        return row

    async def replace(self, project: Project) -> Project:
        async with _writing(self.session):
            result = await self.session.execute(
                update(Project)
                .where(Project.owner_id == self.owner_id, Project.code == project.code)  # type: ignore[arg-type]
                .values(
                    description=project.description,
                    reg_date=project.reg_date,
                    status=project.status,
                )
                .execution_options(synchronize_session="fetch")
            )
        if result.rowcount == 0:
            raise NotFoundError()
        replaced = await self.get(project.code)
        if replaced is None:
            raise NotFoundError()
        await self.session.refresh(replaced)
        return replaced

    async def delete(self, code: str) -> None:
        async with _writing(self.session):
            result = await self.session.execute(
                delete(Project).where(Project.owner_id == self.owner_id, Project.code == code)  # type: ignore[arg-type]
            )
        if result.rowcount == 0:
            raise NotFoundError()

    def for_project(self, code: str) -> "SqlProjectScope":
        return SqlProjectScope(self.session, self.owner_id, code)

    def primary(self) -> "SqlProjectStorage":
        return self


class SqlProjectScope:
    def __init__(self, session: AsyncSession, owner_id: str, project_code: str):
        self.session = session
        self.owner_id = owner_id
        self.project_code = project_code

    def environments(self) -> "SqlEnvironmentStorage":
        return SqlEnvironmentStorage(self.session, self.owner_id, self.project_code)


class SqlEnvironmentStorage:
    def __init__(self, session: AsyncSession, owner_id: str, project_code: str):
        self.session = session
        self.owner_id = owner_id
        self.project_code = project_code

    def _scope(self) -> tuple[Any, Any]:
        return (
            Environment.owner_id == self.owner_id,
            Environment.project_code == self.project_code,
        )

    async def list(self) -> list[Environment]:
        async with _reading():
            result = await self.session.execute(
                select(Environment).where(*self._scope()).order_by(Environment.id)  # type: ignore[arg-type]
            )
            return list(result.scalars().all())

    async def get(self, code: str) -> Environment | None:
        async with _reading():
            result = await self.session.execute(
                select(Environment).where(*self._scope(), Environment.code == code)
            )
            return result.scalar_one_or_none()

    async def save(self, environment: Environment) -> Environment:
        row = Environment(
            owner_id=self.owner_id,
            project_code=self.project_code,
            code=environment.code,
            description=environment.description,
            protected=environment.protected,
            reg_date=environment.reg_date,
        )
        async with _writing(
            self.session,
            on_duplicate=lambda: UniqueConstraintViolation(
                "Environment",
                environment_key(self.owner_id, self.project_code, environment.code),
            ),
        ):
            self.session.add(row)
        await self.session.refresh(row)
        return row

    async def replace(self, environment: Environment) -> Environment:
        async with _writing(self.session):
            result = await self.session.execute(
                update(Environment)
                .where(*self._scope(), Environment.code == environment.code)  # type: ignore[arg-type]
                .values(
                    description=environment.description,
                    protected=environment.protected,
                    reg_date=environment.reg_date,
                )
                .execution_options(synchronize_session="fetch")
            )
        if result.rowcount == 0:
            raise NotFoundError()
        replaced = await self.get(environment.code)
        if replaced is None:
            raise NotFoundError()
        await self.session.refresh(replaced)
        return replaced

    async def delete(self, code: str) -> None:
        async with _writing(self.session):
            result = await self.session.execute(
                delete(Environment).where(*self._scope(), Environment.code == code)  # type: ignore[arg-type]
            )
        if result.rowcount == 0:
            raise NotFoundError()

    def primary(self) -> "SqlEnvironmentStorage":
        return self
