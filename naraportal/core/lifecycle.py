"""Profile lifecycle operations.

Builds profiles on first sign-in and applies administrative edits. Each
edit returns the updated profile together with the activity entry that
records it; neither is persisted here.

Status transitions:

    ACTIVE ⇄ ON_LEAVE
    ACTIVE / ON_LEAVE ──suspend──► SUSPENDED ──reactivate──► ACTIVE
    ACTIVE / ON_LEAVE ──retire───► RETIRED ───reactivate──► ACTIVE
    any (except TERMINATED) ──terminate──► TERMINATED (final)
"""

from datetime import datetime, timezone
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from naraportal.common.logger import get_logger

from .activity import ActivityEntry
from .bootstrap import resolve_default_role
from .directory import DEACTIVATED_STATUSES, ActivityAction, UserStatus
from .exceptions import (
    PermissionDeniedError,
    StatusTransitionError,
    UnknownPermissionError,
    UnknownRoleError,
)
from .profiles import UserProfile
from .rbac.checker import get_effective_permissions, has_permission
from .rbac.permissions import Action, Permission, Resource, is_valid_permission
from .rbac.roles import DEFAULT_REGISTRY, RoleRegistry

logger = get_logger(__name__)

Edit = Tuple[UserProfile, ActivityEntry]

USER_UPDATE = str(Permission(Resource.USER, Action.UPDATE))
USER_DELETE = str(Permission(Resource.USER, Action.DELETE))
USER_MANAGE = str(Permission(Resource.USER, Action.MANAGE))


# Allowed target statuses from each status
STATUS_TRANSITIONS: Dict[UserStatus, FrozenSet[UserStatus]] = {
    UserStatus.ACTIVE: frozenset([
        UserStatus.ON_LEAVE, UserStatus.SUSPENDED, UserStatus.RETIRED, UserStatus.TERMINATED,
    ]),
    UserStatus.ON_LEAVE: frozenset([
        UserStatus.ACTIVE, UserStatus.SUSPENDED, UserStatus.RETIRED, UserStatus.TERMINATED,
    ]),
    UserStatus.SUSPENDED: frozenset([UserStatus.ACTIVE, UserStatus.TERMINATED]),
    UserStatus.RETIRED: frozenset([UserStatus.ACTIVE, UserStatus.TERMINATED]),
    UserStatus.TERMINATED: frozenset(),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _require(actor: UserProfile, permission: str, registry: RoleRegistry) -> None:
    if actor.is_deactivated or not has_permission(actor, permission, registry):
        logger.warning("%s denied %s", actor.uid, permission)
        raise PermissionDeniedError(permission)


def _require_rank(actor: UserProfile, role_key: Optional[str], registry: RoleRegistry) -> None:
    """Deny unless the actor holds a registered role at least as senior as role_key."""
    actor_role = registry.get_role_config(actor.role)
    if actor_role is None:
        logger.warning("%s has no registered role (%s)", actor.uid, actor.role)
        raise PermissionDeniedError("a registered role")
    target = registry.get_role_config(role_key)
    if target is not None and target.level < actor_role.level:
        logger.warning("%s (%s) cannot act on rank of %s", actor.uid, actor.role, role_key)
        raise PermissionDeniedError(f"rank of {role_key}")


def new_profile(
    uid: str,
    *,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    role: Optional[str] = None,
    department: str = "",
    registry: RoleRegistry = DEFAULT_REGISTRY,
) -> Edit:
    """
    Create the profile for a principal's first successful sign-in.

    Args:
        uid: Principal identifier from the auth provider
        role: Initial role; the default role when omitted

    Raises:
        UnknownRoleError: If the role is not registered
        RegistryError: If no role is given and no default is configured
    """
    if not role:
        role = resolve_default_role(registry)
    elif registry.get_role_config(role) is None:
        raise UnknownRoleError(role)

    now = _now()
    profile = UserProfile(
        uid=uid,
        email=email,
        display_name=display_name,
        role=role,
        department=department,
        created_at=now,
        updated_at=now,
        last_login_at=now,
    )
    logger.info("Created profile %s with role %s", uid, role)
    entry = ActivityEntry(
        user_id=uid,
        action=ActivityAction.USER_CREATED,
        details=f"User created with role {role}",
        performed_by=uid,
        metadata={"role": role},
        timestamp=now,
    )
    return profile, entry


def record_login(profile: UserProfile) -> Edit:
    """Stamp a successful sign-in."""
    now = _now()
    updated = profile.model_copy(update={"last_login_at": now, "updated_at": now})
    entry = ActivityEntry(
        user_id=profile.uid,
        action=ActivityAction.LOGIN,
        details="User signed in",
        performed_by=profile.uid,
        timestamp=now,
    )
    return updated, entry


def change_role(
    profile: UserProfile,
    new_role: str,
    actor: UserProfile,
    registry: RoleRegistry = DEFAULT_REGISTRY,
) -> Edit:
    """
    Assign a new role to a user.

    The actor needs user.manage and a registered role. They cannot change
    the role of a user who outranks them, nor hand out a role that
    outranks their own.

    Raises:
        UnknownRoleError: If new_role is not registered
        PermissionDeniedError: If the actor may not make this change
    """
    if registry.get_role_config(new_role) is None:
        raise UnknownRoleError(new_role)
    _require(actor, USER_MANAGE, registry)
    _require_rank(actor, profile.role, registry)
    _require_rank(actor, new_role, registry)

    old_role = profile.role
    now = _now()
    updated = profile.model_copy(update={"role": new_role, "updated_at": now})
    entry = ActivityEntry(
        user_id=profile.uid,
        action=ActivityAction.ROLE_CHANGED,
        details=f"Role changed from {old_role} to {new_role}",
        performed_by=actor.uid,
        metadata={"oldRole": old_role, "newRole": new_role},
        timestamp=now,
    )
    return updated, entry


def update_custom_permissions(
    profile: UserProfile,
    permissions: Iterable[str],
    actor: UserProfile,
    registry: RoleRegistry = DEFAULT_REGISTRY,
) -> Edit:
    """
    Replace a user's custom permission grants.

    The actor cannot edit a user who outranks them, and can only add
    permissions they hold themselves.

    Raises:
        UnknownPermissionError: If any permission is not catalogued
        PermissionDeniedError: If the actor may not make this change
    """
    granted = frozenset(permissions)
    unknown = sorted(p for p in granted if not is_valid_permission(p))
    if unknown:
        raise UnknownPermissionError(unknown)
    _require(actor, USER_MANAGE, registry)
    _require_rank(actor, profile.role, registry)
    new_grants = granted - profile.custom_permissions
    beyond_actor = sorted(new_grants - get_effective_permissions(actor, registry))
    if beyond_actor:
        logger.warning("%s tried to grant permissions they lack: %s", actor.uid, beyond_actor)
        raise PermissionDeniedError(", ".join(beyond_actor))

    now = _now()
    updated = profile.model_copy(update={"custom_permissions": granted, "updated_at": now})
    entry = ActivityEntry(
        user_id=profile.uid,
        action=ActivityAction.PERMISSION_CHANGED,
        details="Custom permissions updated",
        performed_by=actor.uid,
        metadata={"customPermissions": sorted(granted)},
        timestamp=now,
    )
    return updated, entry


def change_status(
    profile: UserProfile,
    new_status: UserStatus,
    actor: UserProfile,
    reason: Optional[str] = None,
    registry: RoleRegistry = DEFAULT_REGISTRY,
) -> Edit:
    """
    Move a user to a new account status.

    The actor needs a registered role at least as senior as the user's.
    The legacy is_active flag is kept in step with the status.

    Raises:
        StatusTransitionError: If the move is not allowed from the current status
        PermissionDeniedError: If the actor lacks the required permission
    """
    new_status = UserStatus(new_status)
    if new_status not in STATUS_TRANSITIONS[profile.status]:
        raise StatusTransitionError(
            f"Cannot change status from {profile.status.value} to {new_status.value}",
            profile.status.value,
            new_status.value,
        )
    terminating = new_status is UserStatus.TERMINATED
    _require(actor, USER_DELETE if terminating else USER_UPDATE, registry)
    _require_rank(actor, profile.role, registry)

    now = _now()
    updated = profile.model_copy(update={
        "status": new_status,
        "status_reason": reason,
        "is_active": new_status not in DEACTIVATED_STATUSES,
        "updated_at": now,
    })
    if terminating:
        action, details = ActivityAction.USER_DELETED, "User terminated"
    else:
        action = ActivityAction.STATUS_CHANGED
        details = f"Status changed to {new_status.value}"
        if reason:
            details += f": {reason}"
    entry = ActivityEntry(
        user_id=profile.uid,
        action=action,
        details=details,
        performed_by=actor.uid,
        metadata={"oldStatus": profile.status.value, "newStatus": new_status.value, "reason": reason},
        timestamp=now,
    )
    logger.info("%s changed status of %s to %s", actor.uid, profile.uid, new_status.value)
    return updated, entry


def suspend(profile: UserProfile, reason: str, actor: UserProfile,
            registry: RoleRegistry = DEFAULT_REGISTRY) -> Edit:
    return change_status(profile, UserStatus.SUSPENDED, actor, reason, registry)


def reactivate(profile: UserProfile, actor: UserProfile,
               registry: RoleRegistry = DEFAULT_REGISTRY) -> Edit:
    return change_status(profile, UserStatus.ACTIVE, actor, None, registry)


def terminate(profile: UserProfile, actor: UserProfile,
              registry: RoleRegistry = DEFAULT_REGISTRY) -> Edit:
    return change_status(profile, UserStatus.TERMINATED, actor, None, registry)
