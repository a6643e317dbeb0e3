from typing import Any, Dict

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

MAX_EXPORT_LIMIT = 5000


class ExportMattersUseCase:
    """Paged matter feed for a firm's BI tooling."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller, limit: int = 1000, offset: int = 0) -> Result[Dict[str, Any]]:
        if limit < 1 or limit > MAX_EXPORT_LIMIT or offset < 0:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_FAILED,
                    f"limit must be between 1 and {MAX_EXPORT_LIMIT}, offset must be >= 0",
                )
            )

        async with self.uow:
            matters = await self.uow.matters.list_by_firm(caller.firm_id, limit=limit, offset=offset)
            items = [m.model_dump(mode="json") for m in matters]

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    event_type=AuditEventType.export.value,
                    entity_type="matter",
                    ip_address=caller.ip_address,
                    details={"via": "external-api", "limit": limit, "offset": offset, "count": len(items)},
                    lawful_basis=lawful_basis.EXPORT_FEED,
                )
            )
            return Return.ok({"firm_id": str(caller.firm_id), "items": items})
