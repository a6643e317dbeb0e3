from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from lexintake.domain.entities import Matter


class IMatterRepository(ABC):
    """Matter repository interface - every lookup is firm-scoped"""

    @abstractmethod
    async def get_for_firm(self, firm_id: UUID, matter_id: UUID) -> Optional[Matter]:
        pass

    @abstractmethod
    async def get_by_external_ref(self, firm_id: UUID, external_ref: str) -> Optional[Matter]:
        pass

    @abstractmethod
    async def list_by_firm(
        self, firm_id: UUID, limit: Optional[int] = None, offset: int = 0
    ) -> List[Matter]:
        pass

    @abstractmethod
    async def create(self, matter: Matter) -> Matter:
        pass

    @abstractmethod
    async def update(self, matter: Matter) -> Matter:
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass
