from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from lexintake.domain.entities import Profile


class IProfileRepository(ABC):
    """Profile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, profile_id: UUID) -> Optional[Profile]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Lookup by lower-cased email"""
        pass

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        pass

    @abstractmethod
    async def update(self, profile: Profile) -> Profile:
        pass

    @abstractmethod
    async def delete(self, profile_id: UUID) -> bool:
        """Hard delete. Returns True if a row was removed."""
        pass
