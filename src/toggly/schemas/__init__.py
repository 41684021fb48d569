"""Pydantic schemas for API request/response bodies."""

from src.toggly.schemas.environment import EnvironmentCreate, EnvironmentRead, EnvironmentUpdate
from src.toggly.schemas.error import ErrorResponse, UniqueViolationResponse
from src.toggly.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

__all__ = [
    "EnvironmentCreate",
    "EnvironmentRead",
    "EnvironmentUpdate",
    "ErrorResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "UniqueViolationResponse",
]
