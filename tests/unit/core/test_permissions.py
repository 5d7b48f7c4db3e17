"""Tests for the permission catalogue."""

import pytest

from naraportal.core.rbac.permissions import (
    ALL_PERMISSIONS, PERMISSION_DEFINITIONS, Action, Permission, Resource,
    get_all_permissions, get_permissions_for_resource, is_valid_permission,
)


class TestPermissionModel:
    """Test permission definitions."""

    def test_permission_string_format(self):
        perm = Permission(Resource.USER, Action.CREATE)
        assert str(perm) == "user.create"

    def test_permission_from_string(self):
        perm = Permission.from_string("division_request.approve")
        assert perm.resource == Resource.DIVISION_REQUEST
        assert perm.action == Action.APPROVE

    def test_invalid_permission_format(self):
        with pytest.raises(ValueError):
            Permission.from_string("invalid")

        with pytest.raises(ValueError):
            Permission.from_string("too.many.parts")

        with pytest.raises(ValueError):
            Permission.from_string("spaceship.fly")

    def test_is_valid_permission(self):
        assert is_valid_permission("user.delete")
        assert is_valid_permission("content.publish")
        assert is_valid_permission("report.view")
        assert not is_valid_permission("invalid.permission")
        assert not is_valid_permission("user.fly")
        assert not is_valid_permission("user:create")

    def test_all_permissions_generated(self):
        all_perms = get_all_permissions()
        assert len(all_perms) == len(PERMISSION_DEFINITIONS)
        assert set(all_perms) == ALL_PERMISSIONS
        assert "user.delete" in all_perms
        assert "log.view" in all_perms
        assert "*" not in all_perms

    def test_all_permissions_sorted(self):
        assert get_all_permissions() == sorted(get_all_permissions())

    def test_permissions_for_resource(self):
        user_perms = get_permissions_for_resource(Resource.USER)
        assert "user.create" in user_perms
        assert "user.delete" in user_perms
        assert "user.manage" in user_perms
        assert "content.create" not in user_perms
