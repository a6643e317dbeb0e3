import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.audit_event_repository import IAuditEventRepository
from lexintake.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_firm_paginated(
        self, firm_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a firm with cursor-based pagination.

        Cursor format: base64-encoded ISO timestamp of created_at
        """
        stmt = select(AuditEvent).where(AuditEvent.firm_id == firm_id)

        if cursor:
            try:
                cursor_timestamp_str = base64.b64decode(cursor).decode("utf-8")
                cursor_timestamp = datetime.fromisoformat(cursor_timestamp_str)
                stmt = stmt.where(AuditEvent.created_at < cursor_timestamp)
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(AuditEvent.created_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            cursor_timestamp_str = events[-1].created_at.isoformat()
            next_cursor = base64.b64encode(cursor_timestamp_str.encode("utf-8")).decode("utf-8")

        return events, next_cursor

    async def list_by_firm(self, firm_id: UUID) -> List[AuditEvent]:
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.firm_id == firm_id)
            .order_by(AuditEvent.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_user(self, user_id: UUID) -> List[AuditEvent]:
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.user_id == user_id)
            .order_by(AuditEvent.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def deidentify_user(self, user_id: UUID) -> int:
        stmt = (
            update(AuditEvent)
            .where(AuditEvent.user_id == user_id)
            .values(user_id=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
