"""Directory reference data for the NARA admin portal.

Static lookup tables for departments, account statuses, government pay
grades and activity-log action kinds. Lookups fail soft: an unknown code
yields None rather than an error.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from .i18n import localized


# ============================================
# Departments / Divisions
# ============================================

@dataclass(frozen=True)
class Department:
    """A NARA division. Display-only; carries no authority."""

    code: str
    name: Mapping[str, str]
    order: int

    def get_name(self, lang: Optional[str] = None) -> str:
        return localized(self.name, lang)


def _dept(code: str, order: int, en: str, si: str, ta: str) -> Department:
    return Department(code, MappingProxyType({"en": en, "si": si, "ta": ta}), order)


DEPARTMENTS: tuple[Department, ...] = (
    _dept("ENV", 1, "Environmental Studies Division", "පරිසර අධ්‍යයන අංශය", "சுற்றுச்சூழல் ஆய்வுப் பிரிவு"),
    _dept("IAR", 2, "Inland Aquatic Resources Development Division", "අභ්‍යන්තර ජලජ සම්පත් සංවර්ධන අංශය", "உள்நாட்டு நீர்வாழ் வளம் பிரிவு"),
    _dept("MBR", 3, "Marine Biological Resources Division", "මුහුදු ජීව විද්‍යා සම්පත් අංශය", "கடல் உயிரியல் வளப் பிரிவு"),
    _dept("FTD", 4, "Fishing Technology Division", "ධීවර තාක්ෂණ අංශය", "மீன்பிடி தொழில்நுட்பப் பிரிவு"),
    _dept("SEM", 5, "Socio-Economics & Marketing Division", "සමාජ ආර්ථික හා අලෙවිකරණ අංශය", "சமூக பொருளாதார பிரிவு"),
    _dept("NHO", 6, "National Hydrographic Office", "ජාතික ජල මැනීම් කාර්යාලය", "தேசிய நீர்நிலை அலுவலகம்"),
    _dept("QAL", 7, "Quality Assurance & Laboratory Division", "ගුණාත්මක සහතික හා රසායනාගාර අංශය", "தர உத்தரவாத பிரிவு"),
    _dept("AQD", 8, "Aquaculture Development Division", "ජලජ වගා සංවර්ධන අංශය", "நீர்வாழ் வளர்ப்புப் பிரிவு"),
    _dept("ITD", 9, "Information Technology Division", "තොරතුරු තාක්ෂණ අංශය", "தகவல் தொழில்நுட்பப் பிரிவு"),
    _dept("FIN", 10, "Finance Division", "මුදල් අංශය", "நிதிப் பிரிவு"),
    _dept("AHR", 11, "Administration & Human Resources Division", "පරිපාලන හා මානව සම්පත් අංශය", "நிர்வாக மற்றும் மனித வளப் பிரிவு"),
    _dept("LIB", 12, "Library & Documentation Division", "පුස්තකාල හා ප්‍රලේඛන අංශය", "நூலக ஆவணப் பிரிவு"),
    _dept("PPD", 13, "Planning & Projects Division", "සැලසුම් හා ව්‍යාපෘති අංශය", "திட்டமிடல் பிரிவு"),
    _dept("RRC", 14, "Regional Research Centers", "ප්‍රාදේශීය පර්යේෂණ මධ්‍යස්ථාන", "பிராந்திய ஆராய்ச்சி மையங்கள்"),
)

_DEPARTMENTS_BY_CODE = MappingProxyType({d.code: d for d in DEPARTMENTS})


def get_department_by_code(code: str) -> Optional[Department]:
    """Get a department by its code, or None if the code is not catalogued."""
    if not isinstance(code, str):
        raise TypeError(f"Department code must be a string, got {type(code).__name__}")
    return _DEPARTMENTS_BY_CODE.get(code)


# ============================================
# Account statuses
# ============================================

class UserStatus(str, Enum):
    """Account status of a user profile."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    ON_LEAVE = "on_leave"
    RETIRED = "retired"
    TERMINATED = "terminated"   # Soft delete; profiles are never removed


# Statuses that revoke administrative access
DEACTIVATED_STATUSES = frozenset([
    UserStatus.SUSPENDED,
    UserStatus.RETIRED,
    UserStatus.TERMINATED,
])


@dataclass(frozen=True)
class StatusConfig:
    value: UserStatus
    label: Mapping[str, str]
    color: str

    def get_label(self, lang: Optional[str] = None) -> str:
        return localized(self.label, lang)


USER_STATUSES: Mapping[UserStatus, StatusConfig] = MappingProxyType({
    UserStatus.ACTIVE: StatusConfig(
        UserStatus.ACTIVE,
        MappingProxyType({"en": "Active", "si": "ක්‍රියාකාරී", "ta": "செயலில்"}),
        "green",
    ),
    UserStatus.SUSPENDED: StatusConfig(
        UserStatus.SUSPENDED,
        MappingProxyType({"en": "Suspended", "si": "අත්හිටුවා ඇත", "ta": "இடைநிறுத்தப்பட்டது"}),
        "red",
    ),
    UserStatus.ON_LEAVE: StatusConfig(
        UserStatus.ON_LEAVE,
        MappingProxyType({"en": "On Leave", "si": "නිවාඩුවේ", "ta": "விடுப்பில்"}),
        "amber",
    ),
    UserStatus.RETIRED: StatusConfig(
        UserStatus.RETIRED,
        MappingProxyType({"en": "Retired", "si": "විශ්‍රාමික", "ta": "ஓய்வு பெற்றவர்"}),
        "slate",
    ),
    UserStatus.TERMINATED: StatusConfig(
        UserStatus.TERMINATED,
        MappingProxyType({"en": "Terminated", "si": "අවසන් කරන ලදී", "ta": "நிறுத்தப்பட்டது"}),
        "gray",
    ),
})


def get_status_config(value: str) -> Optional[StatusConfig]:
    """Get status display config by value, or None if the value is unknown."""
    if not isinstance(value, str):
        raise TypeError(f"Status value must be a string, got {type(value).__name__}")
    try:
        return USER_STATUSES[UserStatus(value)]
    except ValueError:
        return None


# ============================================
# Government pay grades (most senior first)
# ============================================

PAY_GRADES: tuple[str, ...] = (
    "Special Grade",
    "Grade I",
    "Grade II",
    "Grade III",
    "Supra Grade",
    "Class I",
    "Class II",
    "Class III",
)


def is_valid_pay_grade(grade: str) -> bool:
    return grade in PAY_GRADES


# ============================================
# Activity log action kinds
# ============================================

class ActivityAction(str, Enum):
    """Kinds of entries written to the user activity log."""

    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    USER_DELETED = "user_deleted"
    ROLE_CHANGED = "role_changed"
    STATUS_CHANGED = "status_changed"
    PERMISSION_CHANGED = "permission_changed"
    LOGIN = "login"
    LOGOUT = "logout"
    PROFILE_PHOTO_UPDATED = "profile_photo_updated"
    BULK_IMPORT = "bulk_import"
