from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from lexintake.domain.entities import AMLCheck


class IAMLCheckRepository(ABC):
    """AMLCheck repository interface - every lookup is firm-scoped"""

    @abstractmethod
    async def get_for_firm(self, firm_id: UUID, check_id: UUID) -> Optional[AMLCheck]:
        pass

    @abstractmethod
    async def list_by_firm(
        self,
        firm_id: UUID,
        client_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[AMLCheck]:
        pass

    @abstractmethod
    async def create(self, check: AMLCheck) -> AMLCheck:
        pass

    @abstractmethod
    async def update(self, check: AMLCheck) -> AMLCheck:
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass
