"""Tests for the in-memory storage backend (src/toggly/storage/memory.py)."""

import pytest

from src.toggly.core.errors import NotFoundError, UniqueConstraintViolation
from src.toggly.storage import MemoryDataStorage
from tests.factories import EnvironmentFactory, ProjectFactory

pytestmark = pytest.mark.unit


class TestMemoryProjectStorage:
    async def test_list_empty(self, memory_storage: MemoryDataStorage) -> None:
        assert await memory_storage.for_owner("nobody").list() == []

    async def test_get_missing_returns_none(self, memory_storage: MemoryDataStorage) -> None:
        assert await memory_storage.for_owner("o").get("missing") is None

    async def test_save_stamps_scope_owner(self, memory_storage: MemoryDataStorage) -> None:
        project = ProjectFactory.build(owner_id="someone_else")

        saved = await memory_storage.for_owner("o").save(project)

        assert saved.owner_id == "o"
        assert await memory_storage.for_owner("someone_else").list() == []

    async def test_save_duplicate_raises(self, memory_storage: MemoryDataStorage) -> None:
        storage = memory_storage.for_owner("o")
        await storage.save(ProjectFactory.build(code="p1"))

        with pytest.raises(UniqueConstraintViolation) as exc_info:
            await storage.save(ProjectFactory.build(code="p1"))

        assert exc_info.value.key == "owner:o, code:p1"

    async def test_returned_values_are_copies(self, memory_storage: MemoryDataStorage) -> None:
        storage = memory_storage.for_owner("o")
        saved = await storage.save(ProjectFactory.build(code="p1", description="kept"))

        saved.description = "mutated"
        (await storage.get("p1")).description = "mutated again"

        assert (await storage.get("p1")).description == "kept"

    async def test_replace(self, memory_storage: MemoryDataStorage) -> None:
        storage = memory_storage.for_owner("o")
        await storage.save(ProjectFactory.build(code="p1"))

        replaced = await storage.replace(ProjectFactory.disabled(code="p1", description="new"))

        assert replaced.description == "new"
        assert (await storage.get("p1")).status == replaced.status

    async def test_replace_missing_raises(self, memory_storage: MemoryDataStorage) -> None:
        with pytest.raises(NotFoundError):
            await memory_storage.for_owner("o").replace(ProjectFactory.build(code="p1"))

    async def test_delete_missing_raises(self, memory_storage: MemoryDataStorage) -> None:
        with pytest.raises(NotFoundError):
            await memory_storage.for_owner("o").delete("p1")


class TestMemoryEnvironmentStorage:
    async def test_scoped_by_owner_and_project(self, memory_storage: MemoryDataStorage) -> None:
        dev = memory_storage.for_owner("o").for_project("p1").environments()
        other_project = memory_storage.for_owner("o").for_project("p2").environments()
        other_owner = memory_storage.for_owner("x").for_project("p1").environments()

        await dev.save(EnvironmentFactory.build(code="dev"))

        assert [e.code for e in await dev.list()] == ["dev"]
        assert await other_project.list() == []
        assert await other_owner.get("dev") is None

    async def test_save_stamps_scope(self, memory_storage: MemoryDataStorage) -> None:
        environments = memory_storage.for_owner("o").for_project("p1").environments()

        saved = await environments.save(
            EnvironmentFactory.protected_env(code="prod", owner_id="x", project_code="y")
        )

        assert (saved.owner_id, saved.project_code, saved.protected) == ("o", "p1", True)

    async def test_duplicate_and_missing(self, memory_storage: MemoryDataStorage) -> None:
        environments = memory_storage.for_owner("o").for_project("p1").environments()
        await environments.save(EnvironmentFactory.build(code="dev"))

        with pytest.raises(UniqueConstraintViolation):
            await environments.save(EnvironmentFactory.build(code="dev"))
        with pytest.raises(NotFoundError):
            await environments.replace(EnvironmentFactory.build(code="qa"))
        with pytest.raises(NotFoundError):
            await environments.delete("qa")

    async def test_clear(self, memory_storage: MemoryDataStorage) -> None:
        await memory_storage.for_owner("o").save(ProjectFactory.build())
        await memory_storage.for_owner("o").for_project("p1").environments().save(
            EnvironmentFactory.build()
        )

        memory_storage.clear()

        assert memory_storage.projects == {}
        assert memory_storage.environments == {}
