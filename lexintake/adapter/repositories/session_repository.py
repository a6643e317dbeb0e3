from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.session_repository import ISessionRepository
from lexintake.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        result = await self.session.exec(select(Session).where(Session.id == session_id))
        return result.first()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session by ID"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.revoked == False)
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_firm(self, firm_id: UUID) -> int:
        result = await self.session.execute(delete(Session).where(Session.firm_id == firm_id))
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(delete(Session).where(Session.expires_at < now))
        await self.session.flush()
        return result.rowcount
