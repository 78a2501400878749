"""Assignment entity — one driver linked to one load in the assignment ledger."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Assignment:
    id: str
    load_id: str
    driver_id: str
    assigned_at: datetime | None
    org_id: str | None = None
    unassigned_at: datetime | None = None
    reason: str | None = None

    def is_active(self) -> bool:
        """An assignment stays open until unassigned_at is set."""
        return self.unassigned_at is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "org_id": self.org_id,
            "load_id": self.load_id,
            "driver_id": self.driver_id,
            "assigned_at": self.assigned_at.isoformat() if self.assigned_at else None,
            "unassigned_at": self.unassigned_at.isoformat() if self.unassigned_at else None,
            "reason": self.reason,
        }
