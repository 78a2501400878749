"""Port interface for resolving the caller's organization."""

from abc import ABC, abstractmethod


class OrgResolver(ABC):
    @abstractmethod
    async def resolve(self, user_id: str) -> str | None:
        """Return the org id the user acts for, or None if they have none."""
        ...
