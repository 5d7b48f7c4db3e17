"""Tests for settings and start-up."""

import logging

import pytest

from naraportal.core.bootstrap import init_access_control, resolve_default_role
from naraportal.core.config import Settings, get_settings
from naraportal.core.exceptions import RegistryError
from naraportal.core.rbac.roles import DEFAULT_REGISTRY


@pytest.fixture(autouse=True)
def reset_portal_logger():
    logger = logging.getLogger("naraportal")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.default_role is None
        assert settings.default_language == "en"
        assert settings.roles_file is None
        assert settings.supported_languages_list == ["en", "si", "ta"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NARA_DEFAULT_ROLE", "admin_staff")
        monkeypatch.setenv("NARA_SUPPORTED_LANGUAGES", "en, ta")
        settings = get_settings()
        assert settings.default_role == "admin_staff"
        assert settings.supported_languages_list == ["en", "ta"]

    def test_fields(self):
        assert set(Settings.model_fields) == {
            "default_role", "roles_file", "default_language", "supported_languages",
            "log_level", "log_dir", "file_logging",
        }

    def test_cached(self):
        assert get_settings() is get_settings()


class TestInitAccessControl:

    def test_builtin_registry(self):
        registry = init_access_control(Settings(file_logging=False))
        assert registry is DEFAULT_REGISTRY
        assert logging.getLogger("naraportal").handlers

    def test_roles_file(self, tmp_path, sample_roles_yaml):
        path = tmp_path / "roles.yaml"
        path.write_text(sample_roles_yaml, encoding="utf-8")
        settings = Settings(roles_file=str(path), default_role="clerk", file_logging=False)

        registry = init_access_control(settings)

        assert set(registry) == {"chief", "clerk"}

    def test_catalogue_default_role_used(self, tmp_path, sample_roles_yaml):
        path = tmp_path / "roles.yaml"
        path.write_text(sample_roles_yaml, encoding="utf-8")
        settings = Settings(roles_file=str(path), file_logging=False)

        registry = init_access_control(settings)

        assert registry.default_role == "clerk"
        assert resolve_default_role(registry, settings) == "clerk"

    def test_default_role_must_be_registered(self, tmp_path, sample_roles_yaml):
        path = tmp_path / "roles.yaml"
        path.write_text(sample_roles_yaml, encoding="utf-8")
        settings = Settings(roles_file=str(path), default_role="support_staff", file_logging=False)

        with pytest.raises(RegistryError):
            init_access_control(settings)

    def test_file_logging(self, tmp_path):
        log_dir = tmp_path / "logs"
        init_access_control(Settings(file_logging=True, log_dir=str(log_dir)))
        assert (log_dir / "naraportal.log").exists()

    def test_missing_roles_file(self, tmp_path):
        settings = Settings(roles_file=str(tmp_path / "absent.yaml"), file_logging=False)
        with pytest.raises(FileNotFoundError):
            init_access_control(settings)


class TestResolveDefaultRole:

    def test_builtin_default(self):
        assert resolve_default_role(DEFAULT_REGISTRY, Settings()) == "support_staff"

    def test_setting_overrides_registry(self):
        settings = Settings(default_role="admin_staff")
        assert resolve_default_role(DEFAULT_REGISTRY, settings) == "admin_staff"

    def test_catalogue_without_default(self, tmp_path):
        path = tmp_path / "roles.yaml"
        path.write_text("roles:\n  chief:\n    level: 0\n", encoding="utf-8")
        settings = Settings(roles_file=str(path), file_logging=False)
        with pytest.raises(RegistryError):
            init_access_control(settings)
