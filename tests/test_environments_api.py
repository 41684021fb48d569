"""Tests for the environment endpoints nested under a project."""

import pytest
from httpx import AsyncClient

from src.toggly.api.headers import OWNER_HEADER
from tests.helpers import API, TEST_OWNER, create_project

PROJECT = f"{API}/project/p1"
ENVIRONMENTS = f"{PROJECT}/env"


@pytest.fixture
async def project(client: AsyncClient) -> dict:
    return await create_project(client)


async def test_unknown_project(client: AsyncClient) -> None:
    for response in (
        await client.get(ENVIRONMENTS),
        await client.post(ENVIRONMENTS, json={"code": "dev"}),
        await client.get(f"{ENVIRONMENTS}/dev"),
        await client.put(f"{ENVIRONMENTS}/dev", json={"protected": False}),
        await client.delete(f"{ENVIRONMENTS}/dev"),
    ):
        assert response.status_code == 404
        assert response.json() == {"error": "project not found"}


@pytest.mark.usefixtures("project")
class TestEnvironments:
    async def test_list_empty(self, client: AsyncClient) -> None:
        response = await client.get(ENVIRONMENTS)

        assert response.status_code == 200
        assert response.json() == []

    async def test_create(self, client: AsyncClient) -> None:
        response = await client.post(
            ENVIRONMENTS, json={"code": "prod", "description": "Production", "protected": True}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["code"] == "prod"
        assert data["project_code"] == "p1"
        assert data["description"] == "Production"
        assert data["protected"] is True
        assert data["reg_date"]

    async def test_duplicate(self, client: AsyncClient) -> None:
        await client.post(ENVIRONMENTS, json={"code": "dev"})

        response = await client.post(ENVIRONMENTS, json={"code": "dev"})

        assert response.status_code == 409
        assert response.json() == {
            "error": "unique constraint violation",
            "type": "Environment",
            "key": f"owner:{TEST_OWNER}, project:p1, code:dev",
        }

    async def test_get_update_delete(self, client: AsyncClient) -> None:
        created = (await client.post(ENVIRONMENTS, json={"code": "dev"})).json()

        assert (await client.get(f"{ENVIRONMENTS}/dev")).json() == created

        response = await client.put(
            f"{ENVIRONMENTS}/dev", json={"description": "Development", "protected": True}
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["description"] == "Development"
        assert updated["protected"] is True
        assert updated["reg_date"] == created["reg_date"]

        response = await client.delete(f"{ENVIRONMENTS}/dev")
        assert response.status_code == 204
        assert (await client.get(ENVIRONMENTS)).json() == []

    async def test_unknown_environment(self, client: AsyncClient) -> None:
        for response in (
            await client.get(f"{ENVIRONMENTS}/dev"),
            await client.put(f"{ENVIRONMENTS}/dev", json={"protected": False}),
            await client.delete(f"{ENVIRONMENTS}/dev"),
        ):
            assert response.status_code == 404
            assert response.json() == {"error": "environment not found"}

    async def test_update_requires_protected(self, client: AsyncClient) -> None:
        await client.post(ENVIRONMENTS, json={"code": "dev"})

        response = await client.put(f"{ENVIRONMENTS}/dev", json={"description": "x"})

        assert response.status_code == 400
        assert response.json()["error"] == "malformed request"

    async def test_other_owner_cannot_see_environments(self, client: AsyncClient) -> None:
        await client.post(ENVIRONMENTS, json={"code": "dev"})

        response = await client.get(ENVIRONMENTS, headers={OWNER_HEADER: "someone_else"})

        assert response.status_code == 404
        assert response.json() == {"error": "project not found"}

    async def test_project_delete_after_environments_removed(self, client: AsyncClient) -> None:
        await client.post(ENVIRONMENTS, json={"code": "dev"})
        assert (await client.delete(PROJECT)).status_code == 409

        await client.delete(f"{ENVIRONMENTS}/dev")

        assert (await client.delete(PROJECT)).status_code == 204
