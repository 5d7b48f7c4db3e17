"""Tests for the role hierarchy and registry."""

import pytest

from naraportal.common.config import RoleDefinition
from naraportal.core.exceptions import RegistryError
from naraportal.core.rbac.permissions import ALL_PERMISSIONS
from naraportal.core.rbac.roles import (
    DEFAULT_REGISTRY, DEFAULT_ROLES, RoleConfig, build_registry,
    get_role_config, get_roles_sorted_by_level, is_higher_rank, load_role_registry,
)


class TestDefaultRoles:
    """Test default role definitions."""

    def test_all_default_roles_defined(self):
        assert len(DEFAULT_REGISTRY) == 9
        assert set(DEFAULT_REGISTRY) == {
            "system_admin", "director_general", "deputy_director", "division_head",
            "senior_researcher", "research_officer", "technical_officer",
            "admin_staff", "support_staff",
        }

    def test_levels(self):
        assert get_role_config("system_admin").level == 0
        assert get_role_config("director_general").level == 1
        assert get_role_config("division_head").level == 3
        assert get_role_config("support_staff").level == 8

    def test_wildcard_roles_expanded(self):
        assert get_role_config("system_admin").permissions == ALL_PERMISSIONS
        assert get_role_config("director_general").permissions == ALL_PERMISSIONS
        assert "user.delete" in get_role_config("system_admin").permissions
        assert "*" not in get_role_config("system_admin").permissions

    def test_support_staff_has_no_permissions(self):
        assert get_role_config("support_staff").permissions == frozenset()

    def test_division_head_is_scoped_to_division(self):
        perms = get_role_config("division_head").permissions
        assert "division_user.manage" in perms
        assert "division_request.approve" in perms
        assert "user.manage" not in perms
        assert "request.approve" not in perms

    def test_research_officer_cannot_publish(self):
        perms = get_role_config("research_officer").permissions
        assert "content.create" in perms
        assert "content.publish" not in perms

    def test_every_role_has_labels_in_all_languages(self):
        for role in DEFAULT_REGISTRY.values():
            assert set(role.label) == {"en", "si", "ta"}
            assert set(role.description) == {"en", "si", "ta"}

    def test_role_config_is_frozen(self):
        role = get_role_config("support_staff")
        with pytest.raises(Exception):
            role.level = 0
        with pytest.raises(TypeError):
            role.label["en"] = "Boss"

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_REGISTRY["intruder"] = get_role_config("system_admin")


class TestRoleLookup:
    """Test role registry lookups."""

    def test_get_role_config(self):
        role = get_role_config("deputy_director")
        assert isinstance(role, RoleConfig)
        assert role.key == "deputy_director"
        assert role.color == "indigo"

    def test_unknown_role_is_none(self):
        assert get_role_config("__unknown__") is None
        assert get_role_config("") is None
        assert get_role_config(None) is None

    def test_non_string_key_raises(self):
        with pytest.raises(TypeError):
            get_role_config(["system_admin"])
        with pytest.raises(TypeError):
            get_role_config(0)

    def test_label_language_fallback(self):
        role = get_role_config("system_admin")
        assert role.get_label() == "System Administrator"
        assert role.get_label("si") == "පද්ධති පරිපාලක"
        assert role.get_label("fr") == "System Administrator"
        assert role.get_description("ta") == "முழு அமைப்பு அணுகல்"

    def test_label_follows_configured_default_language(self, monkeypatch):
        monkeypatch.setenv("NARA_DEFAULT_LANGUAGE", "si")
        role = get_role_config("system_admin")
        assert role.get_label("fr") == "පද්ධති පරිපාලක"
        assert role.get_label() == "පද්ධති පරිපාලක"
        assert role.get_label("en") == "System Administrator"

    def test_unsupported_language_ignored(self, monkeypatch):
        monkeypatch.setenv("NARA_SUPPORTED_LANGUAGES", "en")
        assert get_role_config("system_admin").get_label("si") == "System Administrator"

    def test_label_falls_back_to_key(self):
        registry = build_registry({"lab_lead": RoleDefinition(key="lab_lead", level=3)})
        assert registry["lab_lead"].get_label("ta") == "Lab Lead"
        assert registry["lab_lead"].get_description() == ""

    def test_sorted_by_level(self):
        roles = get_roles_sorted_by_level()
        levels = [r.level for r in roles]
        assert levels == sorted(levels)
        assert roles[0].key == "system_admin"
        assert roles[-1].key == "support_staff"

    def test_sorted_by_level_is_stable(self):
        first = [r.key for r in get_roles_sorted_by_level()]
        second = [r.key for r in get_roles_sorted_by_level()]
        assert first == second

    def test_sorted_by_level_returns_fresh_list(self):
        roles = get_roles_sorted_by_level()
        roles.clear()
        assert len(get_roles_sorted_by_level()) == 9

    def test_is_higher_rank(self):
        assert is_higher_rank("system_admin", "support_staff")
        assert not is_higher_rank("support_staff", "system_admin")
        assert not is_higher_rank("division_head", "division_head")
        assert not is_higher_rank("system_admin", "__unknown__")
        assert not is_higher_rank("__unknown__", "support_staff")


class TestBuildRegistry:
    """Test building registries from definitions."""

    def test_ties_broken_by_key(self):
        registry = build_registry({
            "zeta": RoleDefinition(key="zeta", level=1),
            "alpha": RoleDefinition(key="alpha", level=1),
            "root": RoleDefinition(key="root", level=0),
        })
        assert [r.key for r in registry.sorted_by_level()] == ["root", "alpha", "zeta"]

    def test_non_contiguous_levels(self):
        registry = build_registry({
            "top": RoleDefinition(key="top", level=0),
            "bottom": RoleDefinition(key="bottom", level=40),
        })
        assert registry["bottom"].level == 40

    def test_unknown_permission_rejected(self):
        with pytest.raises(RegistryError, match="user.fly"):
            build_registry({"x": RoleDefinition(key="x", level=1, permissions=["user.fly"])})

    def test_negative_level_rejected(self):
        with pytest.raises(RegistryError):
            build_registry({"x": RoleDefinition(key="x", level=-1)})

    def test_mismatched_key_rejected(self):
        with pytest.raises(RegistryError):
            build_registry({"x": RoleDefinition(key="y", level=1)})

    def test_default_role_must_be_registered(self):
        with pytest.raises(RegistryError, match="clerk"):
            build_registry({"chief": RoleDefinition(key="chief", level=0)}, default_role="clerk")

    def test_default_role_optional(self):
        registry = build_registry({"chief": RoleDefinition(key="chief", level=0)})
        assert registry.default_role is None
        assert DEFAULT_REGISTRY.default_role == "support_staff"

    def test_default_roles_definitions_untouched(self):
        assert DEFAULT_ROLES["system_admin"].permissions == ["*"]

    def test_load_role_registry(self, tmp_path, sample_roles_yaml):
        path = tmp_path / "roles.yaml"
        path.write_text(sample_roles_yaml, encoding="utf-8")

        registry = load_role_registry(str(path))

        assert set(registry) == {"chief", "clerk"}
        assert registry["chief"].permissions == ALL_PERMISSIONS
        assert registry["clerk"].permissions == {"dashboard.view", "record.manage"}
        assert registry["clerk"].get_label() == "Clerk"
        assert registry["chief"].get_description() == "Runs everything"
        assert registry.default_role == "clerk"

    def test_load_role_registry_without_roles(self, tmp_path):
        path = tmp_path / "roles.yaml"
        path.write_text("default_role: clerk\n", encoding="utf-8")
        with pytest.raises(RegistryError):
            load_role_registry(str(path))
