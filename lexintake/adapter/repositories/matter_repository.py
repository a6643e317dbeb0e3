from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.matter_repository import IMatterRepository
from lexintake.domain.entities import Matter


class MatterRepository(IMatterRepository):
    """Matter repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_firm(self, firm_id: UUID, matter_id: UUID) -> Optional[Matter]:
        stmt = select(Matter).where(Matter.id == matter_id, Matter.firm_id == firm_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_external_ref(self, firm_id: UUID, external_ref: str) -> Optional[Matter]:
        stmt = select(Matter).where(
            Matter.external_ref == external_ref, Matter.firm_id == firm_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_firm(
        self, firm_id: UUID, limit: Optional[int] = None, offset: int = 0
    ) -> List[Matter]:
        stmt = (
            select(Matter)
            .where(Matter.firm_id == firm_id)
            .order_by(Matter.created_at.asc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, matter: Matter) -> Matter:
        self.session.add(matter)
        await self.session.flush()
        await self.session.refresh(matter)
        return matter

    async def update(self, matter: Matter) -> Matter:
        self.session.add(matter)
        await self.session.flush()
        await self.session.refresh(matter)
        return matter

    async def delete_by_firm(self, firm_id: UUID) -> int:
        result = await self.session.execute(delete(Matter).where(Matter.firm_id == firm_id))
        await self.session.flush()
        return result.rowcount
