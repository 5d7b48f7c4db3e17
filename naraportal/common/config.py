"""Configuration management for the NARA portal.

Handles loading of YAML catalogue files that override the built-in
role hierarchy.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class RoleDefinition:
    """Declarative form of a role, as written in code or YAML."""

    key: str
    level: int
    label: Dict[str, str] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)
    color: str = "slate"
    permissions: List[str] = field(default_factory=list)


@dataclass
class CatalogueConfig:
    """Top-level catalogue configuration."""

    roles: Dict[str, RoleDefinition] = field(default_factory=dict)
    default_role: Optional[str] = None


def _as_text_map(value: Any) -> Dict[str, str]:
    # A bare string is treated as English-only text
    if value is None:
        return {}
    if isinstance(value, str):
        return {"en": value}
    return {str(lang): str(text) for lang, text in value.items()}


def parse_role_definition(role_key: str, role_dict: Dict[str, Any]) -> RoleDefinition:
    """Parse a role configuration dictionary.

    Args:
        role_key: Key the role is registered under
        role_dict: Role configuration dictionary

    Returns:
        RoleDefinition instance

    Raises:
        TypeError: If the level is missing or not an integer
    """
    level = role_dict.get("level")
    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(f"Role '{role_key}' needs an integer level, got {level!r}")

    return RoleDefinition(
        key=role_key,
        level=level,
        label=_as_text_map(role_dict.get("label")),
        description=_as_text_map(role_dict.get("description")),
        color=role_dict.get("color", "slate"),
        permissions=list(role_dict.get("permissions") or []),
    )


def parse_config(config_dict: Dict[str, Any]) -> CatalogueConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        CatalogueConfig instance
    """
    roles = {}
    for role_key, role_dict in (config_dict.get("roles") or {}).items():
        roles[role_key] = parse_role_definition(role_key, role_dict or {})

    return CatalogueConfig(
        roles=roles,
        default_role=config_dict.get("default_role"),
    )


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    # Validate config structure
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    # Expand environment variables
    config = _expand_env_vars(config)

    return config


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str) -> CatalogueConfig:
    """Load and parse configuration into typed dataclass.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_dict = load_config(config_path)
    return parse_config(config_dict)
