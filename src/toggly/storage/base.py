"""Storage capability interfaces.

The engine depends only on these protocols, so the backend (SQL, in-memory,
Redis-cached) is chosen at construction time. Contract shared by every backend:

- ``list`` returns an empty list when nothing matches, never raises for it.
- ``get`` returns ``None`` for a missing key.
- ``save`` is insert-only and raises ``UniqueConstraintViolation`` on a
  duplicate key. The check is the backend's own atomic constraint.
- ``replace`` overwrites the full record identified by its key and raises
  ``NotFoundError`` if the key is absent.
- ``delete`` raises ``NotFoundError`` if the key is absent.
- Any other backend failure surfaces as ``StorageError``.
- ``primary()`` returns the storage that owns the data, bypassing any read
  cache in front of it. Reads that guard a mutation go through it.
"""

from typing import Protocol

from src.toggly.models import Environment, Project


def project_key(owner_id: str, code: str) -> str:
    """Human-readable composite key reported in unique violations."""
    return f"owner:{owner_id}, code:{code}"


def environment_key(owner_id: str, project_code: str, code: str) -> str:
    return f"owner:{owner_id}, project:{project_code}, code:{code}"


class EnvironmentStorage(Protocol):
    """Environments of one ``(owner, project)`` scope."""

    async def list(self) -> list[Environment]: ...

    async def get(self, code: str) -> Environment | None: ...

    async def save(self, environment: Environment) -> Environment: ...

    async def replace(self, environment: Environment) -> Environment: ...

    async def delete(self, code: str) -> None: ...

    def primary(self) -> "EnvironmentStorage": ...


class ProjectScopeStorage(Protocol):
    """Accessor narrowed to a single project."""

    def environments(self) -> EnvironmentStorage: ...


class ProjectStorage(Protocol):
    """Projects of one owner."""

    async def list(self) -> list[Project]: ...

    async def get(self, code: str) -> Project | None: ...

    async def save(self, project: Project) -> Project: ...

    async def replace(self, project: Project) -> Project: ...

    async def delete(self, code: str) -> None: ...

    def for_project(self, code: str) -> ProjectScopeStorage: ...

    def primary(self) -> "ProjectStorage": ...


class DataStorage(Protocol):
    """Root of the storage hierarchy."""

    def for_owner(self, owner_id: str) -> ProjectStorage: ...
