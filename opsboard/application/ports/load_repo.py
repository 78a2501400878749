"""Port interface for load persistence."""

from abc import ABC, abstractmethod

from opsboard.domain.entities.load import Load


class LoadRepository(ABC):
    @abstractmethod
    async def get_by_org(self, org_id: str) -> list[Load]:
        ...

    @abstractmethod
    async def get_by_id(self, org_id: str, load_id: str) -> Load | None:
        ...

    @abstractmethod
    async def find_by_reference(self, org_id: str, reference: str) -> Load | None:
        """Exact reference match first, then case-insensitive; latest updated wins."""
        ...

    @abstractmethod
    async def set_assigned_driver(self, load_id: str, driver_id: str | None) -> None:
        ...
