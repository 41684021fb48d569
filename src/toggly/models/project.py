"""Project model - owner-scoped entity."""

from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.toggly.models.base import utc_now
from src.toggly.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Project owned by a single owner.

    ``(owner_id, code)`` is unique; the database constraint is the only
    uniqueness check.
    """

    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("owner_id", "code", name="uq_projects_owner_code"),)

    id: int | None = Field(default=None, primary_key=True)
    owner_id: str = Field(max_length=200, index=True)
    code: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    reg_date: datetime = Field(default_factory=utc_now)
    status: int = Field(default=ProjectStatus.ACTIVE.value)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)
