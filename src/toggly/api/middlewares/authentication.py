"""Authentication and owner resolution middleware.

Runs before routing, so unknown paths are also rejected when the token or
the owner header is missing. The token is checked first: a request with a
bad token never learns whether its owner header was acceptable.
"""

import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.toggly.api.headers import AUTH_HEADER, OWNER_HEADER
from src.toggly.core.errors import AuthenticationFailure, OwnerUnresolved
from src.toggly.core.exceptions import error_response
from src.toggly.core.logging import bind_owner_context, get_logger

logger = get_logger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Check the shared token, then resolve the owner into ``request.state.owner_id``."""

    def __init__(self, app: ASGIApp, auth_token: str):
        super().__init__(app)
        self.auth_token = auth_token.encode()

    def _is_authenticated(self, request: Request) -> bool:
        token = request.headers.get(AUTH_HEADER)
        if not token:
            return False
        return secrets.compare_digest(token.encode(), self.auth_token)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._is_authenticated(request):
            logger.warning("Authentication failed", path=request.url.path)
            return error_response(AuthenticationFailure())

        owner_id = request.headers.get(OWNER_HEADER, "").strip()
        if not owner_id:
            return error_response(OwnerUnresolved())

        request.state.owner_id = owner_id
        bind_owner_context(owner_id)
        return await call_next(request)
