from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from lexintake.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session by ID"""
        pass

    @abstractmethod
    async def delete_by_firm(self, firm_id: UUID) -> int:
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        pass
