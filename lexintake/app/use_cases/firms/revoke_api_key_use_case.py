from typing import Any, Dict, Optional
from uuid import UUID

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return


class RevokeApiKeyUseCase:
    """Deactivates one key (by prefix) or every active key of a firm."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self,
        firm_id: UUID,
        key_prefix: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            now = utc_now()
            if key_prefix:
                revoked = 1 if await self.uow.api_keys.deactivate(firm_id, key_prefix, now) else 0
            else:
                revoked = await self.uow.api_keys.deactivate_all_for_firm(firm_id, now)

            if revoked == 0:
                return Return.err(Error(ErrorCode.NOT_FOUND, "No active API key found"))

            await self.uow.commit()

            await self.audit.record(
                AuditEvent(
                    firm_id=firm_id,
                    event_type=AuditEventType.api_key_revoked.value,
                    entity_type="firm",
                    entity_id=str(firm_id),
                    ip_address=ip_address,
                    details={"key_prefix": key_prefix, "revoked": revoked},
                    lawful_basis=lawful_basis.KEY_ROTATION,
                )
            )
            return Return.ok({"revoked": revoked})
