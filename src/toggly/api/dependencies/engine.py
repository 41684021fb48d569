"""Engine factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.toggly.api.dependencies.owner import OwnerId
from src.toggly.api.dependencies.storage import Storage
from src.toggly.services import Engine, EnvironmentAPI, ProjectAPI


def get_project_api(owner_id: OwnerId, storage: Storage) -> ProjectAPI:
    """Get the project API of the requesting owner."""
    return Engine(storage).for_owner(owner_id).projects()


ProjectAPIDep = Annotated[ProjectAPI, Depends(get_project_api)]


def get_environment_api(project_code: str, projects: ProjectAPIDep) -> EnvironmentAPI:
    """Get the environment API of the project named in the path."""
    return projects.for_project(project_code).environments()


EnvironmentAPIDep = Annotated[EnvironmentAPI, Depends(get_environment_api)]
