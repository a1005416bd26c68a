"""
RBAC Unit Tests

Tests the role hierarchy and comparison helpers at the function level.
No HTTP client needed.
"""

import pytest

from blog_admin.auth.models import AuthContext, UserRole
from blog_admin.auth.rbac import ROLE_HIERARCHY, role_includes, role_level

# ---------------------------------------------------------------------------
# role_level
# ---------------------------------------------------------------------------


class TestRoleLevel:
    def test_admin_level(self):
        assert role_level(UserRole.ADMIN) == 3

    def test_editor_level(self):
        assert role_level(UserRole.EDITOR) == 2

    def test_reader_level(self):
        assert role_level(UserRole.READER) == 1


# ---------------------------------------------------------------------------
# role_includes  (3x3 = 9 parametrized cases)
# ---------------------------------------------------------------------------


class TestRoleIncludes:
    @pytest.mark.parametrize(
        "user_role,required_role,expected",
        [
            # ADMIN includes all
            (UserRole.ADMIN, UserRole.ADMIN, True),
            (UserRole.ADMIN, UserRole.EDITOR, True),
            (UserRole.ADMIN, UserRole.READER, True),
            # EDITOR includes self and below
            (UserRole.EDITOR, UserRole.ADMIN, False),
            (UserRole.EDITOR, UserRole.EDITOR, True),
            (UserRole.EDITOR, UserRole.READER, True),
            # READER includes only self
            (UserRole.READER, UserRole.ADMIN, False),
            (UserRole.READER, UserRole.EDITOR, False),
            (UserRole.READER, UserRole.READER, True),
        ],
    )
    def test_role_includes(self, user_role, required_role, expected):
        assert role_includes(user_role, required_role) == expected


# ---------------------------------------------------------------------------
# Models and constants
# ---------------------------------------------------------------------------


class TestAuthContext:
    def test_defaults_to_reader(self):
        ctx = AuthContext(user_id="u1")
        assert ctx.role is UserRole.READER
        assert ctx.email is None

    def test_role_from_string(self):
        ctx = AuthContext(user_id="u1", role="editor")
        assert ctx.role is UserRole.EDITOR


class TestConstants:
    def test_role_hierarchy_has_three_roles(self):
        assert len(ROLE_HIERARCHY) == 3

    def test_every_role_ranked(self):
        assert set(ROLE_HIERARCHY) == set(UserRole)
