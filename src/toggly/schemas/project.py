"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.toggly.models.enums import ProjectStatus

CODE_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_.-]*$"


def normalize_description(v: str | None) -> str | None:
    """Strip whitespace; blank descriptions are stored as None."""
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    code: str = Field(min_length=1, max_length=200, pattern=CODE_PATTERN)
    description: str | None = Field(default=None, max_length=1000)
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return normalize_description(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Replaces description and status."""

    description: str | None = Field(default=None, max_length=1000)
    status: ProjectStatus

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return normalize_description(v)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    code: str
    description: str | None
    status: ProjectStatus
    reg_date: datetime

    model_config = {"from_attributes": True}
