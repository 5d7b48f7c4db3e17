"""Exceptions raised by the access control core.

Authorization predicates never raise these; they are reserved for
catalogue construction and administrative edits.
"""


class AccessControlError(Exception):
    """Base class for access control errors."""


class RegistryError(AccessControlError):
    """Raised when a role catalogue definition is invalid."""


class UnknownRoleError(AccessControlError):
    """Raised when an edit names a role that is not registered."""

    def __init__(self, role_key: str):
        super().__init__(f"Unknown role: {role_key}")
        self.role_key = role_key


class UnknownPermissionError(AccessControlError):
    """Raised when an edit grants permissions that are not catalogued."""

    def __init__(self, permissions: list[str]):
        super().__init__(f"Unknown permissions: {', '.join(permissions)}")
        self.permissions = permissions


class StatusTransitionError(AccessControlError):
    """Raised when an account status change is not allowed."""

    def __init__(self, message: str, from_status: str, to_status: str):
        super().__init__(message)
        self.from_status = from_status
        self.to_status = to_status


class PermissionDeniedError(AccessControlError):
    """Raised when the acting user lacks permission for an edit."""

    def __init__(self, required_permission: str):
        super().__init__(f"Permission denied: requires {required_permission}")
        self.required_permission = required_permission
