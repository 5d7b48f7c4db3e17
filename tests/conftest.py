"""Pytest configuration and shared fixtures."""

import pytest

from naraportal.core.config import get_settings
from naraportal.core.profiles import UserProfile


@pytest.fixture
def make_profile():
    """Factory for user profiles with sensible defaults."""
    counter = iter(range(1, 10000))

    def _make(role=None, **overrides):
        data = {"uid": f"user-{next(counter)}", "role": role}
        data.update(overrides)
        return UserProfile(**data)

    return _make


@pytest.fixture
def admin(make_profile):
    """An active system administrator."""
    return make_profile("system_admin", uid="admin-1", display_name="Admin User")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_roles_yaml():
    """A small YAML role catalogue."""
    return """
default_role: clerk
roles:
  chief:
    level: 0
    label:
      en: Chief
      si: ප්‍රධානී
    description: Runs everything
    color: red
    permissions: ["*"]
  clerk:
    level: 5
    label: Clerk
    permissions:
      - dashboard.view
      - record.manage
"""
