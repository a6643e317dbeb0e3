from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from lexintake.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_firm_paginated(
        self, firm_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a firm with cursor-based pagination.

        Returns:
            Tuple of (events list, next_cursor)
            - events: List of audit events ordered by created_at DESC
            - next_cursor: Cursor for next page, None if no more events
        """
        pass

    @abstractmethod
    async def list_by_firm(self, firm_id: UUID) -> List[AuditEvent]:
        """All events for a firm, oldest first"""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UUID) -> List[AuditEvent]:
        """All events where the user is the actor, oldest first"""
        pass

    @abstractmethod
    async def deidentify_user(self, user_id: UUID) -> int:
        """Null user_id on every event by this actor. Returns affected rows."""
        pass
