from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import DataExport


class ExportMyDataUseCase:
    """Personal export: the caller's own profile and the audit trail they authored."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller) -> Result[DataExport]:
        async with self.uow:
            profile = await self.uow.profiles.get_by_id(caller.user_id)
            if profile is None or profile.firm_id != caller.firm_id:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Profile not found"))

            events = await self.uow.audit_events.list_by_user(caller.user_id)

            payload = {
                "metadata": {
                    "generated_at": utc_now().isoformat() + "Z",
                    "requested_by_user_id": str(caller.user_id),
                    "firm_id": str(caller.firm_id),
                    "scope": "user_only",
                    "version": 1,
                },
                "user_profile": profile.model_dump(mode="json", exclude={"password_hash"}),
                "audit_events": [e.model_dump(mode="json") for e in events],
            }

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.export.value,
                    entity_type="profile",
                    entity_id=str(caller.user_id),
                    ip_address=caller.ip_address,
                    details={"scope": "user_only", "total_audit_events": len(payload["audit_events"])},
                    lawful_basis=lawful_basis.DATA_EXPORT,
                )
            )

        return Return.ok(
            DataExport(filename=f"gdpr_export_user_{caller.user_id}.json", payload=payload)
        )
