"""Service identification headers."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.toggly.api.headers import SERVICE_NAME, SERVICE_NAME_HEADER, SERVICE_VERSION_HEADER


class ServiceHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp every response with the service name and build revision."""

    def __init__(self, app: ASGIApp, version: str, name: str = SERVICE_NAME):
        super().__init__(app)
        self.headers = {
            SERVICE_NAME_HEADER: name,
            SERVICE_VERSION_HEADER: version,
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers[header] = value
        return response
