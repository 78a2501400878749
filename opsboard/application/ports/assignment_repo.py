"""Port interface for the load ↔ driver assignment ledger."""

from abc import ABC, abstractmethod
from datetime import datetime

from opsboard.domain.entities.assignment import Assignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def get_active_by_org(self, org_id: str) -> list[Assignment]:
        """Return assignments of the org whose unassigned_at is NULL."""
        ...

    @abstractmethod
    async def get_active_for_load(self, load_id: str) -> list[Assignment]:
        ...

    @abstractmethod
    async def get_active_for_driver(self, driver_id: str) -> list[Assignment]:
        ...

    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        ...

    @abstractmethod
    async def close(self, assignment_id: str, unassigned_at: datetime) -> None:
        """Set unassigned_at on an open assignment."""
        ...
