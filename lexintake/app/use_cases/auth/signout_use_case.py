from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.libs.result import Result, Return


class SignoutUseCase:
    """Revokes the current session. Cookies are cleared by the API layer."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller) -> Result[bool]:
        async with self.uow:
            revoked = await self.uow.sessions.revoke_by_id(caller.session_id)
            await self.uow.commit()

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.logout.value,
                    entity_type="session",
                    entity_id=str(caller.session_id),
                    ip_address=caller.ip_address,
                    lawful_basis=lawful_basis.AUTHENTICATION,
                )
            )
            return Return.ok(revoked)
