from typing import Any, Dict

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.libs.result import Result, Return


class ListClientsUseCase:
    """Lists the caller's firm's clients, newest first. Reads are audited."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller) -> Result[Dict[str, Any]]:
        async with self.uow:
            clients = await self.uow.clients.list_by_firm(caller.firm_id)
            data = [c.model_dump(mode="json") for c in clients]

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.read.value,
                    entity_type="client",
                    ip_address=caller.ip_address,
                    details={"count": len(data)},
                    lawful_basis=lawful_basis.CLIENT_MANAGEMENT,
                )
            )
            return Return.ok({"data": data, "count": len(data)})
