"""
Authentication Middleware

Credentials are verified by the gateway in front of this service, which
forwards the resolved identity as request headers. This middleware turns
those headers into an AuthContext on ``request.state``.
"""

import logging
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .models import AuthContext, UserRole

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-Auth-User-Id"
EMAIL_HEADER = "X-Auth-Email"
ROLE_HEADER = "X-Auth-Role"

# Paths that don't require authentication
PUBLIC_PATHS = {
    "/",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
}


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Sets request.state.auth_context from gateway identity headers.

    Requests to non-public paths without an identity get a 401.
    """

    def __init__(self, app, require_auth: bool = True):
        super().__init__(app)
        self.require_auth = require_auth

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        auth_context = self._authenticate(request)

        if auth_context:
            request.state.auth_context = auth_context
            request.state.user = auth_context.user_id  # For access logging
        elif self.require_auth and path not in PUBLIC_PATHS:
            return Response(
                status_code=401,
                content="Authentication required",
            )
        else:
            request.state.auth_context = None

        return await call_next(request)

    def _authenticate(self, request: Request) -> Optional[AuthContext]:
        user_id = request.headers.get(USER_ID_HEADER)
        if not user_id:
            return None

        raw_role = request.headers.get(ROLE_HEADER, "")
        try:
            role = UserRole(raw_role.strip().lower())
        except ValueError:
            logger.warning(f"Unknown role {raw_role!r} for user {user_id}, using reader")
            role = UserRole.READER

        return AuthContext(
            user_id=user_id,
            email=request.headers.get(EMAIL_HEADER),
            role=role,
        )


def get_current_user(request: Request) -> Optional[AuthContext]:
    """
    Dependency to get current authenticated user.

    Usage:
        @app.get("/api/me")
        async def me(user: AuthContext = Depends(get_current_user)):
            return {"user_id": user.user_id}
    """
    return getattr(request.state, "auth_context", None)
