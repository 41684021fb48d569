"""Environment model - project-scoped entity."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.toggly.models.base import utc_now


class Environment(SQLModel, table=True):
    """Environment inside a project.

    There is no foreign key to ``projects``: the relation is the
    ``(owner_id, project_code)`` scoping pair.
    """

    __tablename__ = "environments"
    __table_args__ = (
        UniqueConstraint(
            "owner_id", "project_code", "code", name="uq_environments_owner_project_code"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    owner_id: str = Field(max_length=200)
    project_code: str = Field(max_length=200)
    code: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    protected: bool = Field(default=False)
    reg_date: datetime = Field(default_factory=utc_now)
