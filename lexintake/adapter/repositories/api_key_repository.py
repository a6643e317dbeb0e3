from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.api_key_repository import IApiKeyRepository
from lexintake.domain.entities import ApiKey


class ApiKeyRepository(IApiKeyRepository):
    """ApiKey repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_prefix(self, key_prefix: str) -> Optional[ApiKey]:
        result = await self.session.exec(select(ApiKey).where(ApiKey.key_prefix == key_prefix))
        return result.first()

    async def list_by_firm(self, firm_id: UUID, active_only: bool = False) -> List[ApiKey]:
        stmt = select(ApiKey).where(ApiKey.firm_id == firm_id)
        if active_only:
            stmt = stmt.where(ApiKey.is_active == True)
        stmt = stmt.order_by(ApiKey.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, api_key: ApiKey) -> ApiKey:
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key

    async def deactivate_all_for_firm(self, firm_id: UUID, revoked_at: datetime) -> int:
        stmt = (
            update(ApiKey)
            .where(ApiKey.firm_id == firm_id, ApiKey.is_active == True)
            .values(is_active=False, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def deactivate(self, firm_id: UUID, key_prefix: str, revoked_at: datetime) -> bool:
        stmt = (
            update(ApiKey)
            .where(
                ApiKey.firm_id == firm_id,
                ApiKey.key_prefix == key_prefix,
                ApiKey.is_active == True,
            )
            .values(is_active=False, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def touch_last_used(self, api_key_id: UUID, used_at: datetime) -> None:
        stmt = update(ApiKey).where(ApiKey.id == api_key_id).values(last_used_at=used_at)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_firm(self, firm_id: UUID) -> int:
        result = await self.session.execute(delete(ApiKey).where(ApiKey.firm_id == firm_id))
        await self.session.flush()
        return result.rowcount
