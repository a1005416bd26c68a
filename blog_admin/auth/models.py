"""
Authentication Data Models

Pydantic models for the identity resolved by the upstream auth gateway.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    """User role hierarchy for RBAC."""
    ADMIN = "admin"      # Full access, user management
    EDITOR = "editor"    # Manage content, read analytics
    READER = "reader"    # Read published content only


class AuthContext(BaseModel):
    """Authentication context passed through middleware."""
    user_id: str
    email: Optional[str] = None
    role: UserRole = UserRole.READER
