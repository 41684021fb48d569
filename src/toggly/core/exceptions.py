"""Error-to-response translation.

This is the only place that knows how each error kind looks on the wire.
Middlewares that reject a request before routing use ``error_response``
directly; everything raised inside a route goes through the handlers
installed by ``setup_exception_handlers``.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.toggly.core.errors import (
    ErrorKind,
    MalformedRequest,
    TogglyError,
    UniqueConstraintViolation,
)
from src.toggly.core.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.PROJECT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ENVIRONMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.OWNER_UNRESOLVED: status.HTTP_404_NOT_FOUND,
    ErrorKind.PROJECT_NOT_EMPTY: status.HTTP_409_CONFLICT,
    ErrorKind.UNIQUE_CONSTRAINT_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorKind.MALFORMED_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION_FAILURE: status.HTTP_401_UNAUTHORIZED,
}


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error"},
    )


def error_response(exc: TogglyError) -> Response:
    """Build the HTTP response for a service error."""
    status_code = _STATUS_BY_KIND.get(exc.kind)
    if status_code is None:
        # Storage failures and leaked storage misses: never echo backend details.
        return internal_error_response()
    if exc.kind is ErrorKind.AUTHENTICATION_FAILURE:
        return PlainTextResponse(exc.message, status_code=status_code)

    match exc:
        case UniqueConstraintViolation():
            content: dict = {"error": exc.message, "type": exc.entity_type, "key": exc.key}
        case MalformedRequest():
            content = {"error": exc.message, "details": exc.details}
        case _:
            content = {"error": exc.message}
    return JSONResponse(status_code=status_code, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure the error-to-status mapping for the application."""

    @app.exception_handler(TogglyError)
    async def toggly_error_handler(request: Request, exc: TogglyError) -> Response:
        if exc.kind not in _STATUS_BY_KIND:
            logger.error(
                "Unhandled service error",
                kind=exc.kind.value,
                request_id=correlation_id.get(),
                path=request.url.path,
                exc_info=exc,
            )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        details = jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"})
        return error_response(MalformedRequest(details))

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        # Router-level misses (unknown path, wrong method) are plain text.
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            body = "404 page not found"
        else:
            body = f"{exc.status_code} {str(exc.detail).lower()}"
        return PlainTextResponse(body, status_code=exc.status_code, headers=exc.headers)
