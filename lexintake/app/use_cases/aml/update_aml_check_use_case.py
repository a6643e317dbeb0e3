import logging
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AMLCheckStatus, AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import UpdateAMLCheckCommand

logger = logging.getLogger(__name__)


class UpdateAMLCheckUseCase:
    """
    Records a manual review outcome on an AML check.

    Business Rules:
    - pending -> passed | flagged | escalated; terminal states never change
    - Setting the current status again is a no-op, not a transition
    - notes and risk_level may be updated in any state
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, caller: Caller, check_id: UUID, command: UpdateAMLCheckCommand
    ) -> Result[Dict[str, Any]]:
        changes = command.model_dump(exclude_none=True)
        if not changes:
            return Return.err(Error(ErrorCode.VALIDATION_FAILED, "No updatable fields provided"))

        async with self.uow:
            check = await self.uow.aml_checks.get_for_firm(caller.firm_id, check_id)
            if check is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "AML check not found"))

            current = AMLCheckStatus(check.check_status)
            new_status = command.status
            if new_status is not None and new_status != current:
                if current.is_terminal:
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_STATUS_TRANSITION,
                            f"AML check is {current.value} and can no longer change status",
                        )
                    )
                check.check_status = new_status
                if new_status.is_terminal:
                    check.checked_at = utc_now()

            if command.risk_level is not None:
                check.risk_level = command.risk_level
            if command.notes is not None:
                check.notes = command.notes
            check.updated_at = utc_now()

            try:
                check = await self.uow.aml_checks.update(check)
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[AML] Failed to update check {check_id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to update AML check"))

            payload = check.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    event_type=AuditEventType.update.value,
                    entity_type="aml_check",
                    entity_id=str(check_id),
                    ip_address=caller.ip_address,
                    details={
                        "previous_status": current.value,
                        "update": command.model_dump(mode="json", exclude_none=True),
                    },
                    lawful_basis=lawful_basis.AML_KYC,
                )
            )
            return Return.ok(payload)
