from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from lexintake.adapter.repositories.aml_check_repository import AMLCheckRepository
from lexintake.adapter.repositories.api_key_repository import ApiKeyRepository
from lexintake.adapter.repositories.audit_event_repository import AuditEventRepository
from lexintake.adapter.repositories.client_repository import ClientRepository
from lexintake.adapter.repositories.firm_repository import FirmRepository
from lexintake.adapter.repositories.marketing_lead_repository import MarketingLeadRepository
from lexintake.adapter.repositories.matter_repository import MatterRepository
from lexintake.adapter.repositories.profile_repository import ProfileRepository
from lexintake.adapter.repositories.session_repository import SessionRepository
from lexintake.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.firms = FirmRepository(self.session)
        self.profiles = ProfileRepository(self.session)
        self.clients = ClientRepository(self.session)
        self.matters = MatterRepository(self.session)
        self.aml_checks = AMLCheckRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        self.marketing_leads = MarketingLeadRepository(self.session)
        self.api_keys = ApiKeyRepository(self.session)
        self.sessions = SessionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()


class SessionFactoryUnitOfWork(SqlAlchemyUnitOfWork):
    """
    UnitOfWork owning a fresh session for the duration of the block.

    AsyncSession is not safe for concurrent use, so work fanned out with
    asyncio.gather gets one of these per task.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.session = None

    async def __aenter__(self):
        self.session = self.session_factory()
        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            await self.session.close()
