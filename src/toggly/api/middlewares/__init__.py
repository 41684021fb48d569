"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI

from src.toggly.api.headers import REQUEST_ID_HEADER
from src.toggly.core.config import Settings

from .authentication import AuthenticationMiddleware
from .correlation import generate_request_id
from .logging_context import logging_context_middleware
from .service_headers import ServiceHeadersMiddleware

__all__ = [
    "setup_middlewares",
    "AuthenticationMiddleware",
    "ServiceHeadersMiddleware",
    "generate_request_id",
    "logging_context_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middlewares are added innermost first; the last one added runs first.
    Request order: correlation id -> service headers -> logging context -> auth.
    """
    # Authentication and owner resolution - innermost, right before routing
    app.add_middleware(AuthenticationMiddleware, auth_token=settings.auth_token)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    # Service name/version on every response
    app.add_middleware(ServiceHeadersMiddleware, version=settings.app_version)

    # Correlation ID - echoes X-Toggly-Request-Id verbatim or generates req-<digits>
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=generate_request_id,
        validator=None,
    )
