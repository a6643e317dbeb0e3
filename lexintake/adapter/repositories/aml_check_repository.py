from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.aml_check_repository import IAMLCheckRepository
from lexintake.domain.entities import AMLCheck


class AMLCheckRepository(IAMLCheckRepository):
    """AMLCheck repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_firm(self, firm_id: UUID, check_id: UUID) -> Optional[AMLCheck]:
        stmt = select(AMLCheck).where(AMLCheck.id == check_id, AMLCheck.firm_id == firm_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_firm(
        self,
        firm_id: UUID,
        client_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[AMLCheck]:
        stmt = select(AMLCheck).where(AMLCheck.firm_id == firm_id)
        if client_id is not None:
            stmt = stmt.where(AMLCheck.client_id == client_id)
        stmt = stmt.order_by(AMLCheck.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, check: AMLCheck) -> AMLCheck:
        self.session.add(check)
        await self.session.flush()
        await self.session.refresh(check)
        return check

    async def update(self, check: AMLCheck) -> AMLCheck:
        self.session.add(check)
        await self.session.flush()
        await self.session.refresh(check)
        return check

    async def delete_by_firm(self, firm_id: UUID) -> int:
        result = await self.session.execute(delete(AMLCheck).where(AMLCheck.firm_id == firm_id))
        await self.session.flush()
        return result.rowcount
