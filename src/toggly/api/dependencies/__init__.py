"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

from src.toggly.api.dependencies.engine import (
    EnvironmentAPIDep,
    ProjectAPIDep,
    get_environment_api,
    get_project_api,
)
from src.toggly.api.dependencies.owner import OwnerId, get_owner_id
from src.toggly.api.dependencies.storage import Storage, get_data_storage

__all__ = [
    # Owner
    "OwnerId",
    "get_owner_id",
    # Storage
    "Storage",
    "get_data_storage",
    # Engine
    "EnvironmentAPIDep",
    "ProjectAPIDep",
    "get_environment_api",
    "get_project_api",
]
