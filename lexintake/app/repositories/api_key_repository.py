from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from lexintake.domain.entities import ApiKey


class IApiKeyRepository(ABC):
    """ApiKey repository interface - application layer"""

    @abstractmethod
    async def get_by_prefix(self, key_prefix: str) -> Optional[ApiKey]:
        """Lookup regardless of is_active so revoked keys can be reported"""
        pass

    @abstractmethod
    async def list_by_firm(self, firm_id: UUID, active_only: bool = False) -> List[ApiKey]:
        """Newest first"""
        pass

    @abstractmethod
    async def create(self, api_key: ApiKey) -> ApiKey:
        pass

    @abstractmethod
    async def deactivate_all_for_firm(self, firm_id: UUID, revoked_at: datetime) -> int:
        pass

    @abstractmethod
    async def deactivate(self, firm_id: UUID, key_prefix: str, revoked_at: datetime) -> bool:
        pass

    @abstractmethod
    async def touch_last_used(self, api_key_id: UUID, used_at: datetime) -> None:
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass
