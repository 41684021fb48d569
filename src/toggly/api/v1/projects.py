"""Project endpoints - owner-scoped CRUD."""

from fastapi import APIRouter, status

from src.toggly.api.dependencies import ProjectAPIDep
from src.toggly.schemas import (
    ErrorResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    UniqueViolationResponse,
)

router = APIRouter(prefix="/project", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List all projects of the requesting owner.",
)
async def list_projects(projects: ProjectAPIDep) -> list[ProjectRead]:
    return [ProjectRead.model_validate(p) for p in await projects.list()]


@router.get(
    "/{code}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"model": ErrorResponse, "description": "Project not found"}},
)
async def get_project(code: str, projects: ProjectAPIDep) -> ProjectRead:
    return ProjectRead.model_validate(await projects.get(code))


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed request body"},
        409: {"model": UniqueViolationResponse, "description": "Project code already taken"},
    },
)
async def create_project(request: ProjectCreate, projects: ProjectAPIDep) -> ProjectRead:
    project = await projects.create(request.code, request.description, request.status)
    return ProjectRead.model_validate(project)


@router.put(
    "/{code}",
    response_model=ProjectRead,
    summary="Update project",
    description="Replace description and status. Code and registration date never change.",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed request body"},
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
)
async def update_project(
    code: str,
    request: ProjectUpdate,
    projects: ProjectAPIDep,
) -> ProjectRead:
    project = await projects.update(code, request.description, request.status)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project. Refused while the project has environments.",
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
        409: {"model": ErrorResponse, "description": "Project not empty"},
    },
)
async def delete_project(code: str, projects: ProjectAPIDep) -> None:
    await projects.delete(code)
