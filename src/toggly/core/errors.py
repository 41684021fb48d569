"""Error taxonomy shared by storage, engine and API layers.

Every failure the service reports is one of the classes below. Each carries an
``ErrorKind`` tag so the protocol layer can dispatch on ``exc.kind`` instead of
comparing messages.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PROJECT_NOT_FOUND = "project_not_found"
    ENVIRONMENT_NOT_FOUND = "environment_not_found"
    PROJECT_NOT_EMPTY = "project_not_empty"
    UNIQUE_CONSTRAINT_VIOLATION = "unique_constraint_violation"
    AUTHENTICATION_FAILURE = "authentication_failure"
    OWNER_UNRESOLVED = "owner_unresolved"
    MALFORMED_REQUEST = "malformed_request"
    STORAGE_ERROR = "storage_error"


class TogglyError(Exception):
    """Base class for all service errors."""

    kind: ErrorKind
    message: str = "internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(TogglyError):
    """Storage-level miss. Translated by the engine, never sent to clients."""

    kind = ErrorKind.NOT_FOUND
    message = "not found"


class ProjectNotFound(TogglyError):
    kind = ErrorKind.PROJECT_NOT_FOUND
    message = "project not found"

    def __init__(self, code: str):
        self.code = code
        super().__init__()


class EnvironmentNotFound(TogglyError):
    kind = ErrorKind.ENVIRONMENT_NOT_FOUND
    message = "environment not found"

    def __init__(self, project_code: str, code: str):
        self.project_code = project_code
        self.code = code
        super().__init__()


class ProjectNotEmpty(TogglyError):
    kind = ErrorKind.PROJECT_NOT_EMPTY
    message = "project not empty"

    def __init__(self, code: str):
        self.code = code
        super().__init__()


class UniqueConstraintViolation(TogglyError):
    """Backend rejected a duplicate composite key."""

    kind = ErrorKind.UNIQUE_CONSTRAINT_VIOLATION
    message = "unique constraint violation"

    def __init__(self, entity_type: str, key: str):
        self.entity_type = entity_type
        self.key = key
        super().__init__()

    def __str__(self) -> str:
        return f"{self.message}: {self.entity_type} ({self.key})"


class AuthenticationFailure(TogglyError):
    kind = ErrorKind.AUTHENTICATION_FAILURE
    message = "Unauthorized"


class OwnerUnresolved(TogglyError):
    kind = ErrorKind.OWNER_UNRESOLVED
    message = "Owner not found"


class MalformedRequest(TogglyError):
    kind = ErrorKind.MALFORMED_REQUEST
    message = "malformed request"

    def __init__(self, details: list | None = None):
        self.details = details or []
        super().__init__()


class StorageError(TogglyError):
    """Unclassified backend failure. The original exception is chained."""

    kind = ErrorKind.STORAGE_ERROR
    message = "storage failure"
