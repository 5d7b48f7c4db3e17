"""Permission model for the NARA admin portal.

Defines all resources, actions, and permission combinations.
Uses a matrix approach: permissions = actions × resources.

Permission string format: "resource.action"
Examples:
  - user.create
  - content.publish
  - division_request.approve
  - log.view
"""

from enum import Enum
from typing import NamedTuple, FrozenSet

# Role definitions may list this instead of explicit permissions
WILDCARD = "*"


class Resource(str, Enum):
    """Resources that can be protected by permissions."""

    # Dashboard & analytics
    DASHBOARD = "dashboard"
    ANALYTICS = "analytics"
    REPORT = "report"

    # User management
    USER = "user"
    DIVISION_USER = "division_user"   # Staff inside the manager's own division

    # Public content (news, media, vacancies, library)
    CONTENT = "content"

    # Applications & requests
    APPLICATION = "application"
    REQUEST = "request"
    DIVISION_REQUEST = "division_request"

    # Research
    RESEARCH = "research"
    OWN_RESEARCH = "own_research"

    # Technical
    LAB_DATA = "lab_data"

    # Administration
    RECORD = "record"
    DEPARTMENT = "department"
    SYSTEM = "system"
    CLOUD_FUNCTION = "cloud_function"

    # Logs
    LOG = "log"


class Action(str, Enum):
    """Actions that can be performed on resources."""

    # Standard CRUD actions
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    # Specialized actions
    VIEW = "view"                 # Read-only access to a screen or listing
    MANAGE = "manage"             # Full management (create/update/delete)
    PUBLISH = "publish"           # Make content publicly visible
    APPROVE = "approve"           # Approve requests
    EXPORT = "export"             # Export data (CSV, PDF)


class Permission(NamedTuple):
    """A permission is a combination of resource and action."""
    resource: Resource
    action: Action

    def __str__(self) -> str:
        return f"{self.resource.value}.{self.action.value}"

    @classmethod
    def from_string(cls, perm_str: str) -> "Permission":
        """Parse a permission string like 'user.create'."""
        parts = perm_str.split(".")
        if len(parts) != 2:
            raise ValueError(f"Invalid permission format: {perm_str}")
        return cls(Resource(parts[0]), Action(parts[1]))


# Permission definitions matrix
# Maps each resource to its valid actions
PERMISSION_MATRIX: dict[Resource, FrozenSet[Action]] = {
    Resource.DASHBOARD: frozenset([Action.VIEW]),
    Resource.ANALYTICS: frozenset([Action.VIEW]),
    Resource.REPORT: frozenset([Action.VIEW, Action.EXPORT]),
    Resource.USER: frozenset([
        Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE, Action.MANAGE,
    ]),
    Resource.DIVISION_USER: frozenset([Action.MANAGE]),
    Resource.CONTENT: frozenset([
        Action.CREATE, Action.UPDATE, Action.DELETE, Action.PUBLISH,
    ]),
    Resource.APPLICATION: frozenset([Action.VIEW, Action.MANAGE]),
    Resource.REQUEST: frozenset([Action.APPROVE]),
    Resource.DIVISION_REQUEST: frozenset([Action.APPROVE]),
    Resource.RESEARCH: frozenset([Action.MANAGE]),
    Resource.OWN_RESEARCH: frozenset([Action.MANAGE]),
    Resource.LAB_DATA: frozenset([Action.MANAGE]),
    Resource.RECORD: frozenset([Action.MANAGE]),
    Resource.DEPARTMENT: frozenset([Action.MANAGE]),
    Resource.SYSTEM: frozenset([Action.MANAGE]),
    Resource.CLOUD_FUNCTION: frozenset([Action.MANAGE]),
    Resource.LOG: frozenset([Action.VIEW, Action.EXPORT]),
}


def _generate_permission_definitions() -> dict[str, Permission]:
    """Generate all valid permission combinations from the matrix."""
    permissions = {}
    for resource, actions in PERMISSION_MATRIX.items():
        for action in actions:
            perm = Permission(resource, action)
            permissions[str(perm)] = perm
    return permissions


# All valid permissions as a dictionary: "resource.action" -> Permission
PERMISSION_DEFINITIONS = _generate_permission_definitions()

ALL_PERMISSIONS: FrozenSet[str] = frozenset(PERMISSION_DEFINITIONS)


def is_valid_permission(perm_str: str) -> bool:
    """Check if a permission string is valid."""
    return perm_str in PERMISSION_DEFINITIONS


def get_permissions_for_resource(resource: Resource) -> list[str]:
    """Get all valid permission strings for a resource."""
    return sorted(
        str(Permission(resource, action))
        for action in PERMISSION_MATRIX.get(resource, set())
    )


def get_all_permissions() -> list[str]:
    """Get all valid permission strings."""
    return sorted(PERMISSION_DEFINITIONS)
