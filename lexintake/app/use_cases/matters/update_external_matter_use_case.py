"""
Update External Matter Use Case

Lets a firm's case-management system push matter status and dates.
"""

import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import UpdateExternalMatterCommand

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("status", "expected_closing_date", "deletion_due_date")


class UpdateExternalMatterUseCase:
    """
    Business Rules:
    - Matter located by matter_id, else matter_external_ref, within the firm
    - Only status, expected_closing_date and deletion_due_date are updatable
    - Previous values are captured in the audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, caller: Caller, command: UpdateExternalMatterCommand
    ) -> Result[Dict[str, Any]]:
        if command.matter_id is None and not command.matter_external_ref:
            return Return.err(
                Error(ErrorCode.VALIDATION_FAILED, "matter_id or matter_external_ref is required")
            )

        supplied = command.model_dump(include=set(UPDATABLE_FIELDS), exclude_unset=True)
        if "status" in supplied and supplied["status"] is None:
            del supplied["status"]
        if not supplied:
            return Return.err(Error(ErrorCode.VALIDATION_FAILED, "No updatable fields provided"))

        async with self.uow:
            if command.matter_id is not None:
                matter = await self.uow.matters.get_for_firm(caller.firm_id, command.matter_id)
            else:
                matter = await self.uow.matters.get_by_external_ref(
                    caller.firm_id, command.matter_external_ref
                )
            if matter is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Matter not found for this firm"))

            previous = {
                name: value
                for name, value in matter.model_dump(mode="json").items()
                if name in UPDATABLE_FIELDS
            }

            try:
                for name, value in supplied.items():
                    setattr(matter, name, value)
                matter.updated_at = utc_now()
                matter = await self.uow.matters.update(matter)
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[MATTERS] Update failed for matter {matter.id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to update matter"))

            payload = matter.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    event_type=AuditEventType.update.value,
                    entity_type="matter",
                    entity_id=payload["id"],
                    ip_address=caller.ip_address,
                    details={
                        "via": "external-api",
                        "previous": previous,
                        "update": {name: payload[name] for name in supplied},
                    },
                    lawful_basis=lawful_basis.MATTER_MANAGEMENT,
                )
            )
            return Return.ok(payload)
