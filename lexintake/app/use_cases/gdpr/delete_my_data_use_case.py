"""
Delete My Data Use Case

GDPR Article 17 erasure, requested by a firm owner for their firm.
"""

import logging
from typing import Awaitable, Callable, List, Tuple

import bcrypt

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType, ProfileRole
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import DeletionReport

logger = logging.getLogger(__name__)


class DeleteMyDataUseCase:
    """
    Business Rules:
    - Only a firm_owner may erase, and must re-enter their password
    - Steps run in dependency order: sessions, api_keys, aml_checks, matters,
      clients, marketing_leads, then the requester's audit events are
      de-identified and finally the profile is deleted
    - Each step commits on its own; a failing step is logged, rolled back and
      skipped so later steps still run
    - success reflects whether the profile itself was deleted
    - Audit rows are never deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller, confirm_password: str) -> Result[DeletionReport]:
        if caller.role != ProfileRole.firm_owner.value:
            return Return.err(
                Error(ErrorCode.INSUFFICIENT_ROLE, "Only the firm owner can delete firm data")
            )

        async with self.uow:
            profile = await self.uow.profiles.get_by_id(caller.user_id)
            if profile is None or profile.firm_id != caller.firm_id:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Profile not found"))

            if not bcrypt.checkpw(confirm_password.encode(), profile.password_hash.encode()):
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, "Password is incorrect"))

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.gdpr_deletion_requested.value,
                    entity_type="firm",
                    entity_id=str(caller.firm_id),
                    ip_address=caller.ip_address,
                    lawful_basis=lawful_basis.DATA_ERASURE,
                )
            )

            firm_id = caller.firm_id
            user_id = caller.user_id
            steps: List[Tuple[str, Callable[[], Awaitable[int]]]] = [
                ("sessions", lambda: self.uow.sessions.delete_by_firm(firm_id)),
                ("api_keys", lambda: self.uow.api_keys.delete_by_firm(firm_id)),
                ("aml_checks", lambda: self.uow.aml_checks.delete_by_firm(firm_id)),
                ("matters", lambda: self.uow.matters.delete_by_firm(firm_id)),
                ("clients", lambda: self.uow.clients.delete_by_firm(firm_id)),
                ("marketing_leads", lambda: self.uow.marketing_leads.delete_by_firm(firm_id)),
            ]

            report = DeletionReport(success=False)
            for table, step in steps:
                count = await self._run_step(table, step, report)
                if count is not None:
                    report.deleted[table] = count

            deidentified = await self._run_step(
                "audit_events", lambda: self.uow.audit_events.deidentify_user(user_id), report
            )
            report.deidentified_audit_events = deidentified or 0

            profile_deleted = await self._run_step(
                "profiles", lambda: self._delete_profile(user_id), report
            )
            report.success = bool(profile_deleted)
            if report.success:
                report.deleted["profiles"] = 1
            else:
                report.error = "Profile could not be deleted"

            await self.audit.record(
                AuditEvent(
                    firm_id=firm_id,
                    event_type=AuditEventType.gdpr_deletion_completed.value,
                    entity_type="firm",
                    entity_id=str(firm_id),
                    ip_address=caller.ip_address,
                    details={
                        "deleted": dict(report.deleted),
                        "deidentified_audit_events": report.deidentified_audit_events,
                        "failed_steps": list(report.failed_steps),
                        "success": report.success,
                    },
                    lawful_basis=lawful_basis.DATA_ERASURE,
                )
            )

            return Return.ok(report)

    async def _delete_profile(self, user_id) -> int:
        return 1 if await self.uow.profiles.delete(user_id) else 0

    async def _run_step(self, name: str, step, report: DeletionReport):
        try:
            count = await step()
            await self.uow.commit()
            logger.info(f"[GDPR] Erasure step {name}: {count}")
            return count
        except Exception as e:
            logger.error(f"[GDPR] Erasure step {name} failed: {e!r}")
            report.failed_steps.append(name)
            await self.uow.rollback()
            return None
