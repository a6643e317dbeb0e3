import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType, Client
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import CreateClientCommand

logger = logging.getLogger(__name__)


class CreateClientUseCase:
    """
    Creates a client for the caller's firm.

    Business Rules:
    - firm_id always comes from the authenticated session
    - Email stored lower-cased
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller, command: CreateClientCommand) -> Result[Dict[str, Any]]:
        fields = command.model_dump()
        if fields.get("email"):
            fields["email"] = fields["email"].strip().lower()

        async with self.uow:
            try:
                client = await self.uow.clients.create(Client(firm_id=caller.firm_id, **fields))
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[CLIENTS] Insert failed for firm {caller.firm_id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to create client"))

            payload = client.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.create.value,
                    entity_type="client",
                    entity_id=str(client.id),
                    ip_address=caller.ip_address,
                    details={"name": command.name, "email": fields.get("email")},
                    lawful_basis=lawful_basis.CLIENT_MANAGEMENT,
                )
            )
            return Return.ok(payload)
