"""Environment schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.toggly.schemas.project import CODE_PATTERN, normalize_description


class EnvironmentCreate(BaseModel):
    """Schema for creating an environment."""

    code: str = Field(min_length=1, max_length=200, pattern=CODE_PATTERN)
    description: str | None = Field(default=None, max_length=1000)
    protected: bool = False

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return normalize_description(v)


class EnvironmentUpdate(BaseModel):
    """Schema for updating an environment. Replaces description and protected."""

    description: str | None = Field(default=None, max_length=1000)
    protected: bool

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return normalize_description(v)


class EnvironmentRead(BaseModel):
    """Schema for reading an environment."""

    code: str
    project_code: str
    description: str | None
    protected: bool
    reg_date: datetime

    model_config = {"from_attributes": True}
