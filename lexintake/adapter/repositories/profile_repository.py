from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.profile_repository import IProfileRepository
from lexintake.domain.entities import Profile


class ProfileRepository(IProfileRepository):
    """Profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, profile_id: UUID) -> Optional[Profile]:
        result = await self.session.exec(select(Profile).where(Profile.id == profile_id))
        return result.first()

    async def get_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.email == email.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def update(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def delete(self, profile_id: UUID) -> bool:
        result = await self.session.execute(delete(Profile).where(Profile.id == profile_id))
        await self.session.flush()
        return result.rowcount > 0
