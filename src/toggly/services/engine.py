"""Ownership engine - business rules for projects and environments.

The engine is scoped step by step: ``Engine.for_owner(owner)`` gives the
owner's API, ``.projects()`` the project collection and
``.projects().for_project(code).environments()`` the environments of one
project. It is the only place that builds entity values; storage persists
what it is given.

Rules enforced here:

- Create inserts unconditionally and relies on the backend's unique
  constraint; nothing checks for an existing record first.
- Update reads the current record first and keeps its immutable fields.
- Reads that decide whether a mutation may proceed go to
  ``storage.primary()``, never to a read cache.
- Project delete checks existence, then emptiness, then deletes. The two
  reads and the delete are separate round-trips, so an environment created
  concurrently can still slip in before the delete.
- Storage ``NotFoundError`` never leaves the engine; it becomes
  ``ProjectNotFound`` or ``EnvironmentNotFound``.
"""

from src.toggly.core.errors import (
    EnvironmentNotFound,
    NotFoundError,
    ProjectNotEmpty,
    ProjectNotFound,
)
from src.toggly.core.logging import get_logger
from src.toggly.models import Environment, Project, ProjectStatus
from src.toggly.models.base import utc_now
from src.toggly.storage import DataStorage, EnvironmentStorage, ProjectStorage

logger = get_logger(__name__)


class Engine:
    """Entry point; holds the injected storage."""

    def __init__(self, storage: DataStorage):
        self.storage = storage

    def for_owner(self, owner_id: str) -> "OwnerAPI":
        return OwnerAPI(owner_id, self.storage.for_owner(owner_id))


class OwnerAPI:
    def __init__(self, owner_id: str, storage: ProjectStorage):
        self.owner_id = owner_id
        self.storage = storage

    def projects(self) -> "ProjectAPI":
        return ProjectAPI(self.owner_id, self.storage)


class ProjectAPI:
    """Project operations for one owner."""

    def __init__(self, owner_id: str, storage: ProjectStorage):
        self.owner_id = owner_id
        self.storage = storage

    async def list(self) -> list[Project]:
        return await self.storage.list()

    async def get(self, code: str) -> Project:
        return self._found(code, await self.storage.get(code))

    async def get_current(self, code: str) -> Project:
        """Like ``get``, but read from the primary storage."""
        return self._found(code, await self.storage.primary().get(code))

    def _found(self, code: str, project: Project | None) -> Project:
        if project is None:
            raise ProjectNotFound(code)
        return project

    async def create(
        self,
        code: str,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        """Create a project.

        Raises:
            UniqueConstraintViolation: The owner already has a project with this code.
        """
        project = Project(
            owner_id=self.owner_id,
            code=code,
            description=description,
            reg_date=utc_now(),
            status=int(status),
        )
        saved = await self.storage.save(project)
        logger.info("project_created", project_code=code)
        return saved

    async def update(
        self,
        code: str,
        description: str | None,
        status: ProjectStatus,
    ) -> Project:
        """Replace the mutable fields (description, status) of a project.

        ``code``, ``owner_id`` and ``reg_date`` are carried over unchanged.
        """
        existing = await self.get_current(code)
        replacement = Project(
            owner_id=existing.owner_id,
            code=existing.code,
            reg_date=existing.reg_date,
            description=description,
            status=int(status),
        )
        try:
            updated = await self.storage.replace(replacement)
        except NotFoundError as e:
            raise ProjectNotFound(code) from e
        logger.info("project_updated", project_code=code, status=int(status))
        return updated

    async def delete(self, code: str) -> None:
        """Delete an empty project.

        Raises:
            ProjectNotFound: No such project.
            ProjectNotEmpty: The project still has environments. Nothing is
                deleted implicitly.
        """
        await self.get_current(code)
        primary = self.storage.primary()
        environments = await primary.for_project(code).environments().list()
        if environments:
            raise ProjectNotEmpty(code)
        try:
            await self.storage.delete(code)
        except NotFoundError as e:
            raise ProjectNotFound(code) from e
        logger.info("project_deleted", project_code=code)

    def for_project(self, code: str) -> "ProjectScopeAPI":
        return ProjectScopeAPI(self, code)


class ProjectScopeAPI:
    def __init__(self, projects: ProjectAPI, project_code: str):
        self.projects = projects
        self.project_code = project_code

    def environments(self) -> "EnvironmentAPI":
        return EnvironmentAPI(
            self.projects,
            self.project_code,
            self.projects.storage.for_project(self.project_code).environments(),
        )


class EnvironmentAPI:
    """Environment operations for one ``(owner, project)`` pair.

    Each operation first confirms that the parent project exists.
    """

    def __init__(self, projects: ProjectAPI, project_code: str, storage: EnvironmentStorage):
        self.projects = projects
        self.project_code = project_code
        self.storage = storage

    async def _ensure_project(self) -> Project:
        return await self.projects.get_current(self.project_code)

    async def list(self) -> list[Environment]:
        await self._ensure_project()
        return await self.storage.list()

    async def get(self, code: str) -> Environment:
        await self._ensure_project()
        environment = await self.storage.get(code)
        if environment is None:
            raise EnvironmentNotFound(self.project_code, code)
        return environment

    async def create(
        self,
        code: str,
        description: str | None = None,
        protected: bool = False,
    ) -> Environment:
        await self._ensure_project()
        environment = Environment(
            owner_id=self.projects.owner_id,
            project_code=self.project_code,
            code=code,
            description=description,
            protected=protected,
            reg_date=utc_now(),
        )
        saved = await self.storage.save(environment)
        logger.info("environment_created", project_code=self.project_code, env_code=code)
        return saved

    async def update(self, code: str, description: str | None, protected: bool) -> Environment:
        await self._ensure_project()
        existing = await self.storage.primary().get(code)
        if existing is None:
            raise EnvironmentNotFound(self.project_code, code)
        replacement = Environment(
            owner_id=existing.owner_id,
            project_code=existing.project_code,
            code=existing.code,
            reg_date=existing.reg_date,
            description=description,
            protected=protected,
        )
        try:
            updated = await self.storage.replace(replacement)
        except NotFoundError as e:
            raise EnvironmentNotFound(self.project_code, code) from e
        logger.info("environment_updated", project_code=self.project_code, env_code=code)
        return updated

    async def delete(self, code: str) -> None:
        await self._ensure_project()
        try:
            await self.storage.delete(code)
        except NotFoundError as e:
            raise EnvironmentNotFound(self.project_code, code) from e
        logger.info("environment_deleted", project_code=self.project_code, env_code=code)
