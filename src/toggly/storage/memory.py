"""In-memory storage backend.

Used by the test suite and by ``STORAGE_BACKEND=memory`` for local runs. The
whole store is one process-wide object; every call hands out copies so callers
never hold a reference into the store.
"""

import asyncio
from typing import TypeAlias

from src.toggly.core.errors import NotFoundError, UniqueConstraintViolation
from src.toggly.models import Environment, Project
from src.toggly.storage.base import environment_key, project_key

ProjectKey: TypeAlias = tuple[str, str]
EnvironmentKey: TypeAlias = tuple[str, str, str]


class MemoryDataStorage:
    """Dict-backed storage with the same unique-key semantics as the SQL backend."""

    def __init__(self) -> None:
        self.projects: dict[ProjectKey, Project] = {}
        self.environments: dict[EnvironmentKey, Environment] = {}
        self.lock = asyncio.Lock()

    def for_owner(self, owner_id: str) -> "MemoryProjectStorage":
        return MemoryProjectStorage(self, owner_id)

    def clear(self) -> None:
        self.projects.clear()
        self.environments.clear()


class MemoryProjectStorage:
    def __init__(self, store: MemoryDataStorage, owner_id: str):
        self.store = store
        self.owner_id = owner_id

    async def list(self) -> list[Project]:
        return [
            Project(**p.model_dump())
            for (owner_id, _), p in self.store.projects.items()
            if owner_id == self.owner_id
        ]

    async def get(self, code: str) -> Project | None:
        project = self.store.projects.get((self.owner_id, code))
        return Project(**project.model_dump()) if project else None

    async def save(self, project: Project) -> Project:
        key = (self.owner_id, project.code)
        async with self.store.lock:
            if key in self.store.projects:
                raise UniqueConstraintViolation("Project", project_key(*key))
            stored = Project(**project.model_dump(exclude={"owner_id"}), owner_id=self.owner_id)
            self.store.projects[key] = stored
        return Project(**stored.model_dump())

    async def replace(self, project: Project) -> Project:
        key = (self.owner_id, project.code)
        async with self.store.lock:
            if key not in self.store.projects:
                raise NotFoundError()
            stored = Project(**project.model_dump(exclude={"owner_id"}), owner_id=self.owner_id)
            self.store.projects[key] = stored
        return Project(**stored.model_dump())

    async def delete(self, code: str) -> None:
        async with self.store.lock:
            if self.store.projects.pop((self.owner_id, code), None) is None:
                raise NotFoundError()

    def for_project(self, code: str) -> "MemoryProjectScope":
        return MemoryProjectScope(self.store, self.owner_id, code)

    def primary(self) -> "MemoryProjectStorage":
        return self


class MemoryProjectScope:
    def __init__(self, store: MemoryDataStorage, owner_id: str, project_code: str):
        self.store = store
        self.owner_id = owner_id
        self.project_code = project_code

    def environments(self) -> "MemoryEnvironmentStorage":
        return MemoryEnvironmentStorage(self.store, self.owner_id, self.project_code)


class MemoryEnvironmentStorage:
    def __init__(self, store: MemoryDataStorage, owner_id: str, project_code: str):
        self.store = store
        self.owner_id = owner_id
        self.project_code = project_code

    def _key(self, code: str) -> EnvironmentKey:
        return (self.owner_id, self.project_code, code)

    def _stored(self, environment: Environment) -> Environment:
        return Environment(
            **environment.model_dump(exclude={"owner_id", "project_code"}),
            owner_id=self.owner_id,
            project_code=self.project_code,
        )

    async def list(self) -> list[Environment]:
        return [
            Environment(**e.model_dump())
            for (owner_id, project_code, _), e in self.store.environments.items()
            if owner_id == self.owner_id and project_code == self.project_code
        ]

    async def get(self, code: str) -> Environment | None:
        environment = self.store.environments.get(self._key(code))
        return Environment(**environment.model_dump()) if environment else None

    async def save(self, environment: Environment) -> Environment:
        key = self._key(environment.code)
        async with self.store.lock:
            if key in self.store.environments:
                raise UniqueConstraintViolation("Environment", environment_key(*key))
            stored = self._stored(environment)
            self.store.environments[key] = stored
        return Environment(**stored.model_dump())

    async def replace(self, environment: Environment) -> Environment:
        key = self._key(environment.code)
        async with self.store.lock:
            if key not in self.store.environments:
                raise NotFoundError()
            stored = self._stored(environment)
            self.store.environments[key] = stored
        return Environment(**stored.model_dump())

    async def delete(self, code: str) -> None:
        async with self.store.lock:
            if self.store.environments.pop(self._key(code), None) is None:
                raise NotFoundError()

    def primary(self) -> "MemoryEnvironmentStorage":
        return self
