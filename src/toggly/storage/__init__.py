"""Storage layer - backend-independent persistence for projects and environments."""

from src.toggly.storage.base import (
    DataStorage,
    EnvironmentStorage,
    ProjectScopeStorage,
    ProjectStorage,
    environment_key,
    project_key,
)
from src.toggly.storage.cache import CachedDataStorage
from src.toggly.storage.memory import MemoryDataStorage
from src.toggly.storage.sql import SqlDataStorage

__all__ = [
    # Interfaces
    "DataStorage",
    "EnvironmentStorage",
    "ProjectScopeStorage",
    "ProjectStorage",
    "environment_key",
    "project_key",
    # Backends
    "CachedDataStorage",
    "MemoryDataStorage",
    "SqlDataStorage",
]
