from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.firm_repository import IFirmRepository
from lexintake.domain.entities import Firm


class FirmRepository(IFirmRepository):
    """Firm repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, firm_id: UUID) -> Optional[Firm]:
        result = await self.session.exec(select(Firm).where(Firm.id == firm_id))
        return result.first()

    async def create(self, firm: Firm) -> Firm:
        self.session.add(firm)
        await self.session.flush()
        await self.session.refresh(firm)
        return firm

    async def update(self, firm: Firm) -> Firm:
        self.session.add(firm)
        await self.session.flush()
        await self.session.refresh(firm)
        return firm
