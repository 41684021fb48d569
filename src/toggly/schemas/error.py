"""Error response bodies, used for OpenAPI documentation."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


class UniqueViolationResponse(ErrorResponse):
    type: str
    key: str
