"""
Role-Based Access Control (RBAC) Module

Provides:
- Role hierarchy definition
- Role comparison helpers
- FastAPI dependencies for endpoint protection
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from .models import UserRole

logger = logging.getLogger(__name__)


# --- Role Hierarchy ---

# Higher roles inherit access from lower roles
ROLE_HIERARCHY = {
    UserRole.ADMIN: 3,
    UserRole.EDITOR: 2,
    UserRole.READER: 1,
}


def role_level(role: UserRole) -> int:
    """Get numeric level for role comparison."""
    return ROLE_HIERARCHY.get(role, 0)


def role_includes(user_role: UserRole, required_role: UserRole) -> bool:
    """Check if user_role is at or above required_role in hierarchy."""
    return role_level(user_role) >= role_level(required_role)


# --- FastAPI Dependencies ---


def RoleChecker(minimum_role: UserRole):
    """
    FastAPI dependency factory for role level checking.

    Usage:
        @router.get("/api/analytics/overview")
        async def get_overview(_: None = Depends(RoleChecker(UserRole.EDITOR))):
            ...
    """

    async def check_role(request: Request):
        from .middleware import get_current_user

        user = get_current_user(request)
        if not user:
            raise HTTPException(status_code=401, detail="Authentication required")

        if not role_includes(user.role, minimum_role):
            logger.info(
                f"Denied {request.url.path} to {user.user_id}: "
                f"role {user.role.value} below {minimum_role.value}"
            )
            raise HTTPException(
                status_code=403,
                detail=f"Requires {minimum_role.value} or higher",
            )
        return None

    return check_role
