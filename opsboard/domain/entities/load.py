"""Load entity — a shipment on the ops board."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Load:
    id: str
    org_id: str | None = None
    reference: str | None = None
    status: str | None = None
    pod_status: str | None = None
    assigned_driver_id: str | None = None
    driver_name: str | None = None
    pickup_at: datetime | None = None
    delivery_at: datetime | None = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Return the record as the upstream store holds it (extra columns included)."""
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "org_id": self.org_id,
                "reference": self.reference,
                "status": self.status,
                "pod_status": self.pod_status,
                "assigned_driver_id": self.assigned_driver_id,
                "driver_name": self.driver_name,
                "pickup_at": self.pickup_at.isoformat() if self.pickup_at else None,
                "delivery_at": self.delivery_at.isoformat() if self.delivery_at else None,
            }
        )
        return data
