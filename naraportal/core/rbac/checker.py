"""Permission checking utilities for the NARA admin portal.

Every predicate here fails closed: a missing profile, an unregistered
role or an unknown permission yields "no access" instead of an error.
Only programmer misuse (wrong argument types) raises, as TypeError.
"""

from typing import FrozenSet, Iterable, Optional, Union

from naraportal.common.logger import get_logger
from naraportal.core.profiles import UserProfile

from .permissions import Permission, Resource, Action
from .roles import DEFAULT_REGISTRY, RoleRegistry

logger = get_logger(__name__)

_EMPTY: FrozenSet[str] = frozenset()


def _permission_str(permission: Union[str, Permission]) -> str:
    if isinstance(permission, Permission):
        return str(permission)
    if not isinstance(permission, str):
        raise TypeError(f"Permission must be a string, got {type(permission).__name__}")
    return permission


def _check_profile(profile) -> Optional[UserProfile]:
    if profile is not None and not isinstance(profile, UserProfile):
        raise TypeError(f"Expected a UserProfile or None, got {type(profile).__name__}")
    return profile


class PermissionChecker:
    """Checks an effective permission set."""

    def __init__(self, user_permissions: Iterable[str], registry: RoleRegistry = DEFAULT_REGISTRY):
        """
        Initialize with the user's permissions.

        Args:
            user_permissions: Permission strings granted to the user
            registry: Role registry used for rank lookups
        """
        self.permissions = frozenset(user_permissions)
        self.registry = registry

    @classmethod
    def for_profile(cls, profile: Optional[UserProfile], registry: RoleRegistry = DEFAULT_REGISTRY) -> "PermissionChecker":
        return cls(get_effective_permissions(profile, registry), registry)

    def has_permission(self, permission: Union[str, Permission]) -> bool:
        """Check if user has a specific permission."""
        return _permission_str(permission) in self.permissions

    def has_any_permission(self, permissions: Iterable[Union[str, Permission]]) -> bool:
        """Check if user has any of the given permissions."""
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[Union[str, Permission]]) -> bool:
        """Check if user has all of the given permissions."""
        return all(self.has_permission(p) for p in permissions)

    def can_access_resource(self, resource: Resource, action: Action) -> bool:
        """Check if user can perform action on resource."""
        return self.has_permission(Permission(resource, action))

    def get_accessible_resources(self, action: Action) -> list[Resource]:
        """Get list of resources the user can perform the action on."""
        return [r for r in Resource if self.can_access_resource(r, action)]


def get_role_permissions(role_key: Optional[str], registry: RoleRegistry = DEFAULT_REGISTRY) -> FrozenSet[str]:
    """Get the configured permissions of a role; empty if the role is unknown."""
    role = registry.get_role_config(role_key)
    if role is None:
        return _EMPTY
    return role.permissions


def role_has_permission(role_key: Optional[str], permission: Union[str, Permission],
                        registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    """Check if a role grants a specific permission."""
    return _permission_str(permission) in get_role_permissions(role_key, registry)


def get_effective_permissions(profile: Optional[UserProfile], registry: RoleRegistry = DEFAULT_REGISTRY) -> FrozenSet[str]:
    """
    Get a user's effective permissions.

    Args:
        profile: Loaded user profile, or None when nobody is signed in
        registry: Role registry to resolve the profile's role against

    Returns:
        Union of the role's permissions and the profile's custom grants
    """
    if _check_profile(profile) is None:
        return _EMPTY
    return get_role_permissions(profile.role, registry) | profile.custom_permissions


def has_permission(profile: Optional[UserProfile], permission: Union[str, Permission],
                   registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    """
    Check if a user has a specific permission.

    Args:
        profile: Loaded user profile, or None
        permission: Permission string or Permission object

    Returns:
        True if the permission is in the user's effective set
    """
    perm_str = _permission_str(permission)
    granted = perm_str in get_effective_permissions(profile, registry)
    if not granted:
        logger.debug(
            "Permission %s denied for %s",
            perm_str, profile.uid if profile is not None else "<anonymous>",
        )
    return granted


def has_any_permission(profile: Optional[UserProfile], permissions: Iterable[Union[str, Permission]],
                       registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    return PermissionChecker.for_profile(profile, registry).has_any_permission(permissions)


def has_all_permissions(profile: Optional[UserProfile], permissions: Iterable[Union[str, Permission]],
                        registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    return PermissionChecker.for_profile(profile, registry).has_all_permissions(permissions)


def has_role(profile: Optional[UserProfile], required_role_key: str,
             registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    """
    Check if a user holds the required role or a more senior one.

    Compares levels, not keys: lower level means higher rank. An
    unregistered role on either side never grants access.
    """
    if not isinstance(required_role_key, str):
        raise TypeError(f"Role key must be a string, got {type(required_role_key).__name__}")
    if _check_profile(profile) is None:
        return False

    user_role = registry.get_role_config(profile.role)
    required_role = registry.get_role_config(required_role_key)
    if user_role is None or required_role is None:
        logger.debug(
            "Role check %s failed for %s: unregistered role %r",
            required_role_key, profile.uid,
            profile.role if user_role is None else required_role_key,
        )
        return False
    return user_role.level <= required_role.level


def is_admin(profile: Optional[UserProfile], registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    """Check if a user has any registered role on a non-deactivated account."""
    if _check_profile(profile) is None:
        return False
    if registry.get_role_config(profile.role) is None:
        return False
    return not profile.is_deactivated
