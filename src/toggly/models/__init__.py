"""Model exports.

Import from here: `from src.toggly.models import Project, Environment`
"""

from src.toggly.models.enums import ProjectStatus
from src.toggly.models.environment import Environment
from src.toggly.models.project import Project

__all__ = [
    "Environment",
    "Project",
    "ProjectStatus",
]
