from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.marketing_lead_repository import IMarketingLeadRepository
from lexintake.domain.entities import MarketingLead


class MarketingLeadRepository(IMarketingLeadRepository):
    """MarketingLead repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, firm_id: Optional[UUID], email: str) -> Optional[MarketingLead]:
        stmt = select(MarketingLead).where(MarketingLead.email == email)
        if firm_id is None:
            stmt = stmt.where(MarketingLead.firm_id.is_(None))
        else:
            stmt = stmt.where(MarketingLead.firm_id == firm_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_firm(self, firm_id: UUID) -> List[MarketingLead]:
        stmt = (
            select(MarketingLead)
            .where(MarketingLead.firm_id == firm_id)
            .order_by(MarketingLead.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, lead: MarketingLead) -> MarketingLead:
        self.session.add(lead)
        await self.session.flush()
        await self.session.refresh(lead)
        return lead

    async def delete_by_firm(self, firm_id: UUID) -> int:
        stmt = delete(MarketingLead).where(MarketingLead.firm_id == firm_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_created_before(self, cutoff: datetime) -> int:
        stmt = delete(MarketingLead).where(MarketingLead.created_at < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
