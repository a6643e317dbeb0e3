from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from lexintake.domain.entities import MarketingLead


class IMarketingLeadRepository(ABC):
    """MarketingLead repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, firm_id: Optional[UUID], email: str) -> Optional[MarketingLead]:
        """firm_id=None matches public (firm-less) leads only"""
        pass

    @abstractmethod
    async def list_by_firm(self, firm_id: UUID) -> List[MarketingLead]:
        pass

    @abstractmethod
    async def create(self, lead: MarketingLead) -> MarketingLead:
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass

    @abstractmethod
    async def delete_created_before(self, cutoff: datetime) -> int:
        pass
