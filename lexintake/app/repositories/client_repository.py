from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from lexintake.domain.entities import Client


class IClientRepository(ABC):
    """Client repository interface - every lookup is firm-scoped"""

    @abstractmethod
    async def get_for_firm(self, firm_id: UUID, client_id: UUID) -> Optional[Client]:
        """Returns None for clients of other firms as well as missing ones"""
        pass

    @abstractmethod
    async def find_for_firm(
        self,
        firm_id: UUID,
        external_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[Client]:
        """Match on external_id if given, otherwise on email"""
        pass

    @abstractmethod
    async def list_by_firm(self, firm_id: UUID) -> List[Client]:
        """Newest first"""
        pass

    @abstractmethod
    async def create(self, client: Client) -> Client:
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass
