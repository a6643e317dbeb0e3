from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.app.repositories.client_repository import IClientRepository
from lexintake.domain.entities import Client


class ClientRepository(IClientRepository):
    """Client repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_firm(self, firm_id: UUID, client_id: UUID) -> Optional[Client]:
        stmt = select(Client).where(Client.id == client_id, Client.firm_id == firm_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def find_for_firm(
        self,
        firm_id: UUID,
        external_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[Client]:
        stmt = select(Client).where(Client.firm_id == firm_id)
        if external_id:
            stmt = stmt.where(Client.external_id == external_id)
        elif email:
            stmt = stmt.where(Client.email == email)
        else:
            return None
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_firm(self, firm_id: UUID) -> List[Client]:
        stmt = (
            select(Client)
            .where(Client.firm_id == firm_id)
            .order_by(Client.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete_by_firm(self, firm_id: UUID) -> int:
        result = await self.session.execute(delete(Client).where(Client.firm_id == firm_id))
        await self.session.flush()
        return result.rowcount
