"""User profile model.

Profiles arrive from the persistence layer as raw documents; this model is
the validation boundary. The stored document field names (camelCase,
e.g. ``customPermissions``, ``isActive``) are accepted alongside the
snake_case attribute names.
"""

from datetime import datetime
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .directory import DEACTIVATED_STATUSES, UserStatus


class UserProfile(BaseModel):
    """One authenticated principal. Immutable; edits return a copy."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    uid: str = Field(..., min_length=1)
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[str] = None
    custom_permissions: FrozenSet[str] = frozenset()
    status: UserStatus = UserStatus.ACTIVE
    status_reason: Optional[str] = None
    department: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @field_validator("custom_permissions", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return frozenset() if value is None else value

    @field_validator("role", mode="before")
    @classmethod
    def _blank_role_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("department", mode="before")
    @classmethod
    def _none_department_is_empty(cls, value):
        return "" if value is None else value

    @property
    def is_deactivated(self) -> bool:
        """True if the legacy flag is off or the status revokes access."""
        return not self.is_active or self.status in DEACTIVATED_STATUSES

    def to_document(self) -> dict:
        """Serialize using the persistence layer's field names."""
        data = self.model_dump(by_alias=True, mode="json")
        data["customPermissions"] = sorted(self.custom_permissions)
        return data
