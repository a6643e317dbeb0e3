"""
Upsert External Client Use Case

Client sync from a firm's own systems via API key.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType, Client
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import UpsertClientResponse, UpsertExternalClientCommand

logger = logging.getLogger(__name__)


class UpsertExternalClientUseCase:
    """
    Insert-or-update a client for the API key's firm.

    Business Rules:
    - Match key is external_id when given, otherwise email
    - At least one of external_id / email is required
    - Matching is always within the caller's firm
    - On update every supplied field overwrites the stored one
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, caller: Caller, command: UpsertExternalClientCommand
    ) -> Result[UpsertClientResponse]:
        email = command.email.strip().lower() if command.email else None
        if not command.external_id and not email:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_FAILED,
                    "Either external_id or email must be provided for upsert",
                )
            )

        fields = command.model_dump(exclude={"email"})
        fields["email"] = email

        async with self.uow:
            try:
                existing = await self.uow.clients.find_for_firm(
                    caller.firm_id, external_id=command.external_id, email=email
                )
                if existing is None:
                    client = await self.uow.clients.create(Client(firm_id=caller.firm_id, **fields))
                    created = True
                else:
                    for name, value in fields.items():
                        if value is not None:
                            setattr(existing, name, value)
                    existing.updated_at = utc_now()
                    client = await self.uow.clients.update(existing)
                    created = False
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[CLIENTS] External upsert failed for firm {caller.firm_id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to save client"))

            payload = client.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    event_type=(AuditEventType.create if created else AuditEventType.update).value,
                    entity_type="client",
                    entity_id=str(client.id),
                    ip_address=caller.ip_address,
                    details={
                        "external_id": command.external_id,
                        "email": email,
                        "via": "external-api",
                        "api_key_prefix": caller.api_key_prefix,
                    },
                    lawful_basis=lawful_basis.CLIENT_INTAKE,
                )
            )
            return Return.ok(UpsertClientResponse(created=created, client=payload))
