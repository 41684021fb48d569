"""Shared enums for models."""

from enum import IntEnum


class ProjectStatus(IntEnum):
    """Project lifecycle status, serialized as its integer value."""

    ACTIVE = 0
    DISABLED = 1
