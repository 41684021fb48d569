"""Environment endpoints - CRUD nested under a project."""

from fastapi import APIRouter, status

from src.toggly.api.dependencies import EnvironmentAPIDep
from src.toggly.schemas import (
    EnvironmentCreate,
    EnvironmentRead,
    EnvironmentUpdate,
    ErrorResponse,
    UniqueViolationResponse,
)

router = APIRouter(prefix="/project/{project_code}/env", tags=["environments"])

_PROJECT_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Project not found"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Project or environment not found"}}


@router.get(
    "",
    response_model=list[EnvironmentRead],
    summary="List environments",
    responses=_PROJECT_NOT_FOUND,
)
async def list_environments(environments: EnvironmentAPIDep) -> list[EnvironmentRead]:
    return [EnvironmentRead.model_validate(e) for e in await environments.list()]


@router.get(
    "/{env_code}",
    response_model=EnvironmentRead,
    summary="Get environment",
    responses=_NOT_FOUND,
)
async def get_environment(env_code: str, environments: EnvironmentAPIDep) -> EnvironmentRead:
    return EnvironmentRead.model_validate(await environments.get(env_code))


@router.post(
    "",
    response_model=EnvironmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create environment",
    responses={
        **_PROJECT_NOT_FOUND,
        400: {"model": ErrorResponse, "description": "Malformed request body"},
        409: {"model": UniqueViolationResponse, "description": "Environment code already taken"},
    },
)
async def create_environment(
    request: EnvironmentCreate,
    environments: EnvironmentAPIDep,
) -> EnvironmentRead:
    environment = await environments.create(request.code, request.description, request.protected)
    return EnvironmentRead.model_validate(environment)


@router.put(
    "/{env_code}",
    response_model=EnvironmentRead,
    summary="Update environment",
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse, "description": "Malformed body"}},
)
async def update_environment(
    env_code: str,
    request: EnvironmentUpdate,
    environments: EnvironmentAPIDep,
) -> EnvironmentRead:
    environment = await environments.update(env_code, request.description, request.protected)
    return EnvironmentRead.model_validate(environment)


@router.delete(
    "/{env_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete environment",
    responses=_NOT_FOUND,
)
async def delete_environment(env_code: str, environments: EnvironmentAPIDep) -> None:
    await environments.delete(env_code)
