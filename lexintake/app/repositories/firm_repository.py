from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from lexintake.domain.entities import Firm


class IFirmRepository(ABC):
    """Firm repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, firm_id: UUID) -> Optional[Firm]:
        pass

    @abstractmethod
    async def create(self, firm: Firm) -> Firm:
        pass

    @abstractmethod
    async def update(self, firm: Firm) -> Firm:
        pass
