"""Role hierarchy for the NARA admin portal.

Defines the 9 organisational roles. Level 0 is the highest authority,
level 8 the lowest:
0. System Administrator - Full system access
1. Director General - Full organisational access
2. Deputy Director - Broad administrative authority
3. Division Head - Manages a division and its staff
4. Senior Researcher - Leads research projects
5. Research Officer - Conducts research and publishes findings
6. Technical Officer - Laboratory and technical operations
7. Administrative Staff - Records and coordination
8. Support Staff - No administrative permissions

Roles are built once into an immutable RoleRegistry. A role declared with
the "*" wildcard is expanded to every catalogued permission at build time.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Optional

from naraportal.common.config import RoleDefinition, load_typed_config
from naraportal.common.logger import get_logger
from naraportal.core.exceptions import RegistryError
from naraportal.core.i18n import localized

from .permissions import (
    ALL_PERMISSIONS, WILDCARD, Action, Permission, Resource, is_valid_permission,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoleConfig:
    """Resolved, immutable configuration of a single role."""

    key: str
    level: int
    label: Mapping[str, str]
    color: str
    permissions: FrozenSet[str]
    description: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def get_label(self, lang: Optional[str] = None, default_lang: Optional[str] = None) -> str:
        return localized(self.label, lang, default_lang) or self.key.replace("_", " ").title()

    def get_description(self, lang: Optional[str] = None, default_lang: Optional[str] = None) -> str:
        return localized(self.description, lang, default_lang)


class RoleRegistry(Mapping):
    """Read-only mapping of role key -> RoleConfig.

    default_role names the role given to new profiles when the catalogue
    declares one.
    """

    def __init__(self, roles: Dict[str, RoleConfig], default_role: Optional[str] = None):
        self._default_role = default_role
        self._roles = MappingProxyType(dict(roles))
        self._sorted = tuple(sorted(self._roles.values(), key=lambda r: (r.level, r.key)))

    @property
    def default_role(self) -> Optional[str]:
        return self._default_role

    def __getitem__(self, key: str) -> RoleConfig:
        return self._roles[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"RoleRegistry({', '.join(r.key for r in self._sorted)})"

    def get_role_config(self, role_key: Optional[str]) -> Optional[RoleConfig]:
        """Get a role's configuration, or None if the key is not registered."""
        if role_key is None:
            return None
        if not isinstance(role_key, str):
            raise TypeError(f"Role key must be a string, got {type(role_key).__name__}")
        return self._roles.get(role_key)

    def sorted_by_level(self) -> List[RoleConfig]:
        """Roles ordered most senior first, ties broken by key."""
        return list(self._sorted)


def _build_permissions(*perms: tuple) -> List[str]:
    """Build permission strings from (Resource, Action) tuples."""
    return [str(Permission(r, a)) for r, a in perms]


def build_role_config(definition: RoleDefinition) -> RoleConfig:
    """Validate a role definition and resolve it into a RoleConfig.

    Raises:
        RegistryError: If the definition has a bad key or level, or lists
            permissions that are not catalogued
    """
    if not isinstance(definition.key, str) or not definition.key:
        raise RegistryError(f"Role key must be a non-empty string, got {definition.key!r}")
    level = definition.level
    if isinstance(level, bool) or not isinstance(level, int) or level < 0:
        raise RegistryError(f"Role '{definition.key}' has invalid level {level!r}")

    if WILDCARD in definition.permissions:
        permissions = ALL_PERMISSIONS
    else:
        unknown = sorted(p for p in definition.permissions if not is_valid_permission(p))
        if unknown:
            raise RegistryError(
                f"Role '{definition.key}' lists unknown permissions: {', '.join(unknown)}"
            )
        permissions = frozenset(definition.permissions)

    return RoleConfig(
        key=definition.key,
        level=level,
        label=MappingProxyType(dict(definition.label)),
        description=MappingProxyType(dict(definition.description)),
        color=definition.color,
        permissions=permissions,
    )


def build_registry(definitions: Dict[str, RoleDefinition],
                   default_role: Optional[str] = None) -> RoleRegistry:
    """Build an immutable registry from role definitions.

    Raises:
        RegistryError: If any definition is invalid or registered under a
            key different from its own, or default_role is not registered
    """
    roles = {}
    for key, definition in definitions.items():
        if key != definition.key:
            raise RegistryError(f"Role '{definition.key}' registered under key '{key}'")
        roles[key] = build_role_config(definition)

    if default_role is not None and default_role not in roles:
        raise RegistryError(f"Default role '{default_role}' is not registered")

    registry = RoleRegistry(roles, default_role)
    logger.info("Built role registry with %d roles", len(registry))
    return registry


def load_role_registry(config_path: str) -> RoleRegistry:
    """Build a registry from the roles section of a YAML catalogue file."""
    catalogue = load_typed_config(config_path)
    if not catalogue.roles:
        raise RegistryError(f"No roles defined in {config_path}")
    logger.info("Loading role catalogue from %s", config_path)
    return build_registry(catalogue.roles, catalogue.default_role)


# Deputy Director: senior management with broad administrative authority
DEPUTY_DIRECTOR_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.ANALYTICS, Action.VIEW),

    # Users - full management across divisions
    (Resource.USER, Action.CREATE),
    (Resource.USER, Action.READ),
    (Resource.USER, Action.UPDATE),
    (Resource.USER, Action.DELETE),
    (Resource.USER, Action.MANAGE),

    # Content - full editorial control
    (Resource.CONTENT, Action.CREATE),
    (Resource.CONTENT, Action.UPDATE),
    (Resource.CONTENT, Action.DELETE),
    (Resource.CONTENT, Action.PUBLISH),

    (Resource.APPLICATION, Action.VIEW),
    (Resource.APPLICATION, Action.MANAGE),
    (Resource.REQUEST, Action.APPROVE),
    (Resource.DEPARTMENT, Action.MANAGE),
    (Resource.LOG, Action.VIEW),
)

# Division Head: manages a division and its staff
DIVISION_HEAD_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.ANALYTICS, Action.VIEW),
    (Resource.DIVISION_USER, Action.MANAGE),

    (Resource.CONTENT, Action.CREATE),
    (Resource.CONTENT, Action.UPDATE),
    (Resource.CONTENT, Action.PUBLISH),

    (Resource.APPLICATION, Action.VIEW),
    (Resource.APPLICATION, Action.MANAGE),
    (Resource.DIVISION_REQUEST, Action.APPROVE),
    (Resource.LOG, Action.VIEW),
)

# Senior Researcher: leads research projects and manages research data
SENIOR_RESEARCHER_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.ANALYTICS, Action.VIEW),
    (Resource.CONTENT, Action.CREATE),
    (Resource.CONTENT, Action.UPDATE),
    (Resource.CONTENT, Action.PUBLISH),
    (Resource.RESEARCH, Action.MANAGE),
    (Resource.APPLICATION, Action.VIEW),
)

# Research Officer: drafts content, publishing goes through a senior
RESEARCH_OFFICER_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.ANALYTICS, Action.VIEW),
    (Resource.CONTENT, Action.CREATE),
    (Resource.OWN_RESEARCH, Action.MANAGE),
)

TECHNICAL_OFFICER_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.CONTENT, Action.CREATE),
    (Resource.LAB_DATA, Action.MANAGE),
)

ADMIN_STAFF_PERMISSIONS = _build_permissions(
    (Resource.DASHBOARD, Action.VIEW),
    (Resource.ANALYTICS, Action.VIEW),
    (Resource.RECORD, Action.MANAGE),
)

# Support Staff: recognised staff role without administrative permissions
SUPPORT_STAFF_PERMISSIONS: List[str] = []


def _role(key, level, label, description, color, permissions) -> RoleDefinition:
    return RoleDefinition(
        key=key,
        level=level,
        label=label,
        description=description,
        color=color,
        permissions=list(permissions),
    )


# Default role hierarchy
DEFAULT_ROLES: Dict[str, RoleDefinition] = {
    "system_admin": _role(
        "system_admin", 0,
        {"en": "System Administrator", "si": "පද්ධති පරිපාලක", "ta": "கணினி நிர்வாகி"},
        {"en": "Full system access and configuration", "si": "සම්පූර්ණ පද්ධති ප්‍රවේශය", "ta": "முழு அமைப்பு அணுகல்"},
        "red", [WILDCARD],
    ),
    "director_general": _role(
        "director_general", 1,
        {"en": "Director General", "si": "අධ්‍යක්ෂ ජනරාල්", "ta": "பணிப்பாளர் நாயகம்"},
        {"en": "Head of NARA - full organizational access", "si": "NARA ප්‍රධානී", "ta": "NARA தலைவர்"},
        "purple", [WILDCARD],
    ),
    "deputy_director": _role(
        "deputy_director", 2,
        {"en": "Deputy Director", "si": "නියෝජ්‍ය අධ්‍යක්ෂ", "ta": "துணை இயக்குநர்"},
        {"en": "Senior management with broad administrative authority", "si": "ජ්‍යෙෂ්ඨ කළමනාකරණය", "ta": "மூத்த நிர்வாகம்"},
        "indigo", DEPUTY_DIRECTOR_PERMISSIONS,
    ),
    "division_head": _role(
        "division_head", 3,
        {"en": "Division Head", "si": "අංශ ප්‍රධානී", "ta": "பிரிவுத் தலைவர்"},
        {"en": "Manages a division and its staff", "si": "අංශයක් හා එහි කාර්ය මණ්ඩලය කළමනාකරණය කරයි", "ta": "ஒரு பிரிவை நிர்வகிக்கிறார்"},
        "blue", DIVISION_HEAD_PERMISSIONS,
    ),
    "senior_researcher": _role(
        "senior_researcher", 4,
        {"en": "Senior Researcher", "si": "ජ්‍යෙෂ්ඨ පර්යේෂක", "ta": "மூத்த ஆராய்ச்சியாளர்"},
        {"en": "Leads research projects and manages research data", "si": "පර්යේෂණ ව්‍යාපෘති මෙහෙයවයි", "ta": "ஆராய்ச்சி திட்டங்களை வழிநடத்துகிறார்"},
        "cyan", SENIOR_RESEARCHER_PERMISSIONS,
    ),
    "research_officer": _role(
        "research_officer", 5,
        {"en": "Research Officer", "si": "පර්යේෂණ නිලධාරී", "ta": "ஆராய்ச்சி அதிகாரி"},
        {"en": "Conducts research and publishes findings", "si": "පර්යේෂණ පවත්වයි", "ta": "ஆராய்ச்சி நடத்துகிறார்"},
        "teal", RESEARCH_OFFICER_PERMISSIONS,
    ),
    "technical_officer": _role(
        "technical_officer", 6,
        {"en": "Technical Officer", "si": "තාක්ෂණ නිලධාරී", "ta": "தொழில்நுட்ப அதிகாரி"},
        {"en": "Manages laboratory and technical operations", "si": "රසායනාගාර හා තාක්ෂණ මෙහෙයුම්", "ta": "ஆய்வக நடவடிக்கைகள்"},
        "green", TECHNICAL_OFFICER_PERMISSIONS,
    ),
    "admin_staff": _role(
        "admin_staff", 7,
        {"en": "Administrative Staff", "si": "පරිපාලන කාර්ය මණ්ඩලය", "ta": "நிர்வாக ஊழியர்கள்"},
        {"en": "Handles administrative records and coordination", "si": "පරිපාලන වාර්තා හා සම්බන්ධීකරණය", "ta": "நிர்வாக பதிவுகள்"},
        "amber", ADMIN_STAFF_PERMISSIONS,
    ),
    "support_staff": _role(
        "support_staff", 8,
        {"en": "Support Staff", "si": "ආධාරක කාර්ය මණ්ඩලය", "ta": "ஆதரவு ஊழியர்கள்"},
        {"en": "General support and operational tasks", "si": "සාමාන්‍ය ආධාරක කාර්යයන්", "ta": "பொது ஆதரவு"},
        "slate", SUPPORT_STAFF_PERMISSIONS,
    ),
}

DEFAULT_REGISTRY = build_registry(DEFAULT_ROLES, default_role="support_staff")


def get_role_config(role_key: Optional[str], registry: RoleRegistry = DEFAULT_REGISTRY) -> Optional[RoleConfig]:
    """Get role config by role key, or None if it is not registered."""
    return registry.get_role_config(role_key)


def get_roles_sorted_by_level(registry: RoleRegistry = DEFAULT_REGISTRY) -> List[RoleConfig]:
    """Get all roles sorted by hierarchy level (most senior first)."""
    return registry.sorted_by_level()


def is_higher_rank(role_key_a: str, role_key_b: str, registry: RoleRegistry = DEFAULT_REGISTRY) -> bool:
    """Check if role A strictly outranks role B (lower level = higher rank)."""
    a = registry.get_role_config(role_key_a)
    b = registry.get_role_config(role_key_b)
    if a is None or b is None:
        return False
    return a.level < b.level
