"""User activity log entries.

Entries are plain records; writing them to the activity log collection is
the persistence layer's job.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .directory import ActivityAction


@dataclass(frozen=True)
class ActivityEntry:
    """A single activity log record."""

    user_id: str
    action: ActivityAction
    details: str
    performed_by: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "action": self.action.value,
            "details": self.details,
            "performedBy": self.performed_by,
            "metadata": self.metadata or None,
            "timestamp": self.timestamp.isoformat(),
        }
