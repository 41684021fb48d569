"""Service layer - ownership engine."""

from src.toggly.services.engine import (
    Engine,
    EnvironmentAPI,
    OwnerAPI,
    ProjectAPI,
    ProjectScopeAPI,
)

__all__ = [
    "Engine",
    "EnvironmentAPI",
    "OwnerAPI",
    "ProjectAPI",
    "ProjectScopeAPI",
]
