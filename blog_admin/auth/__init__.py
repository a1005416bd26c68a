"""
Authorization Module for the Blog Admin API

Provides:
- Gateway identity middleware
- Role-based access control (RBAC)
"""

from .middleware import AuthMiddleware, get_current_user
from .models import AuthContext, UserRole
from .rbac import ROLE_HIERARCHY, RoleChecker, role_includes, role_level

__all__ = [
    # Middleware
    "AuthMiddleware",
    "get_current_user",
    # Models
    "AuthContext",
    "UserRole",
    # RBAC
    "ROLE_HIERARCHY",
    "RoleChecker",
    "role_includes",
    "role_level",
]
