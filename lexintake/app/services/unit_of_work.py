from abc import ABC, abstractmethod

from lexintake.app.repositories.aml_check_repository import IAMLCheckRepository
from lexintake.app.repositories.api_key_repository import IApiKeyRepository
from lexintake.app.repositories.audit_event_repository import IAuditEventRepository
from lexintake.app.repositories.client_repository import IClientRepository
from lexintake.app.repositories.firm_repository import IFirmRepository
from lexintake.app.repositories.marketing_lead_repository import IMarketingLeadRepository
from lexintake.app.repositories.matter_repository import IMatterRepository
from lexintake.app.repositories.profile_repository import IProfileRepository
from lexintake.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    firms: IFirmRepository
    profiles: IProfileRepository
    clients: IClientRepository
    matters: IMatterRepository
    aml_checks: IAMLCheckRepository
    audit_events: IAuditEventRepository
    marketing_leads: IMarketingLeadRepository
    api_keys: IApiKeyRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
