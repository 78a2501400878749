"""Port interface for driver persistence."""

from abc import ABC, abstractmethod

from opsboard.domain.entities.driver import Driver


class DriverRepository(ABC):
    @abstractmethod
    async def get_by_org(self, org_id: str) -> list[Driver]:
        ...

    @abstractmethod
    async def get_by_id(self, org_id: str, driver_id: str) -> Driver | None:
        ...

    @abstractmethod
    async def find_by_name_or_code(self, org_id: str, term: str) -> Driver | None:
        """Match a driver code or "First Last" name, exact before partial."""
        ...

    @abstractmethod
    async def update_status(self, driver_id: str, status: str) -> None:
        ...
