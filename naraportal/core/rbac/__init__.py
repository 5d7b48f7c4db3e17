"""RBAC (Role-Based Access Control) module for the NARA admin portal.

This module defines the permission model, the role hierarchy, and the
authorization predicates protected routes and admin screens rely on.
"""

from naraportal.core.directory import get_department_by_code

from .permissions import Permission, Resource, Action, PERMISSION_DEFINITIONS
from .roles import (
    DEFAULT_REGISTRY,
    RoleConfig,
    RoleRegistry,
    build_registry,
    get_role_config,
    get_roles_sorted_by_level,
    is_higher_rank,
    load_role_registry,
)
from .checker import (
    PermissionChecker,
    get_effective_permissions,
    get_role_permissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
    has_role,
    is_admin,
    role_has_permission,
)

__all__ = [
    "Permission",
    "Resource",
    "Action",
    "PERMISSION_DEFINITIONS",
    "DEFAULT_REGISTRY",
    "RoleConfig",
    "RoleRegistry",
    "build_registry",
    "get_role_config",
    "get_roles_sorted_by_level",
    "get_department_by_code",
    "is_higher_rank",
    "load_role_registry",
    "PermissionChecker",
    "get_effective_permissions",
    "get_role_permissions",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "has_role",
    "is_admin",
    "role_has_permission",
]
