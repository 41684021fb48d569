"""Logging context middleware for request correlation."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.toggly.core.exceptions import internal_error_response
from src.toggly.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to log context for all requests.

    Unexpected exceptions are turned into a 500 here, inside the correlation
    and service-header middlewares, so error responses carry those headers too.
    """
    clear_request_context()
    bind_request_context(correlation_id.get())
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception("Unhandled exception", path=request.url.path, exc_info=e)
        return internal_error_response()
    finally:
        clear_request_context()
