"""Process start-up for the access control core."""

from typing import Optional

from naraportal.common.logger import setup_logger

from .config import Settings, get_settings
from .exceptions import RegistryError
from .rbac.roles import DEFAULT_REGISTRY, RoleRegistry, load_role_registry


def resolve_default_role(registry: RoleRegistry, settings: Optional[Settings] = None) -> str:
    """
    Role given to a new profile: NARA_DEFAULT_ROLE when set, else the
    registry's own default.

    Raises:
        RegistryError: If no default is configured or it is not registered
    """
    settings = settings or get_settings()
    role = settings.default_role or registry.default_role
    if role is None:
        raise RegistryError("No default role configured")
    if role not in registry:
        raise RegistryError(f"Default role '{role}' is not registered")
    return role


def init_access_control(settings: Optional[Settings] = None) -> RoleRegistry:
    """
    Configure logging and build the role registry once at start-up.

    Args:
        settings: Settings to use; read from the environment when omitted

    Returns:
        The built-in registry, or one loaded from settings.roles_file

    Raises:
        RegistryError: If the default role is missing or not registered
    """
    settings = settings or get_settings()
    logger = setup_logger(
        "naraportal",
        log_dir=settings.log_dir,
        level=settings.log_level,
        file_logging=settings.file_logging,
    )

    registry = DEFAULT_REGISTRY
    if settings.roles_file:
        registry = load_role_registry(settings.roles_file)

    default_role = resolve_default_role(registry, settings)
    logger.info("Access control ready: %s, default role %s", registry, default_role)
    return registry
