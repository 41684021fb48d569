"""Test helpers shared by the HTTP tests."""

from httpx import AsyncClient

TEST_OWNER = "test_owner"
API = "/api/v1"


async def create_project(client: AsyncClient, code: str = "p1", **body) -> dict:
    """Create a project through the API and return the response body."""
    response = await client.post(f"{API}/project", json={"code": code, **body})
    assert response.status_code == 201, response.text
    return response.json()
