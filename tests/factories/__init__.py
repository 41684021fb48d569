"""Test factories for generating test data.

    from tests.factories import ProjectFactory, EnvironmentFactory
"""

from tests.factories.base import BaseFactory, unique_code, utc_now
from tests.factories.project import EnvironmentFactory, ProjectFactory

__all__ = [
    "BaseFactory",
    "EnvironmentFactory",
    "ProjectFactory",
    "unique_code",
    "utc_now",
]
