import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType, Matter
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import CreateMatterCommand

logger = logging.getLogger(__name__)


class CreateMatterUseCase:
    """
    Opens a matter for one of the caller's clients.

    Business Rules:
    - client_id must belong to the caller's firm, else NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller, command: CreateMatterCommand) -> Result[Dict[str, Any]]:
        async with self.uow:
            client = await self.uow.clients.get_for_firm(caller.firm_id, command.client_id)
            if client is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Client not found"))

            try:
                matter = await self.uow.matters.create(
                    Matter(firm_id=caller.firm_id, **command.model_dump())
                )
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[MATTERS] Insert failed for firm {caller.firm_id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to create matter"))

            payload = matter.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.create.value,
                    entity_type="matter",
                    entity_id=str(matter.id),
                    ip_address=caller.ip_address,
                    details={"client_id": str(command.client_id), "title": command.title},
                    lawful_basis=lawful_basis.MATTER_MANAGEMENT,
                )
            )
            return Return.ok(payload)
