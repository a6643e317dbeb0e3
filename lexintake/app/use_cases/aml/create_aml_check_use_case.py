"""
Create AML Check Use Case

Screens one of the firm's clients and records the outcome.
"""

import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.aml_provider import AMLProviderError, IAMLProvider, ScreeningRequest
from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AMLCheck, AMLCheckStatus, AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import CreateAMLCheckCommand

logger = logging.getLogger(__name__)


class CreateAMLCheckUseCase:
    """
    Use case for creating an AML check.

    Business Rules:
    - client_id must belong to the caller's firm; otherwise NOT_FOUND, exactly
      as if it did not exist
    - With the provider enabled its verdict decides status and risk; the
      caller-supplied status is ignored
    - Provider failure after retries -> UPSTREAM_UNAVAILABLE, audited as
      aml_check_failed, nothing stored
    - With the provider disabled the supplied status (default pending) is stored
    - The check is committed before it is audited; a failed audit write never
      undoes the check
    """

    def __init__(self, uow: UnitOfWork, provider: IAMLProvider):
        self.uow = uow
        self.provider = provider
        self.audit = AuditRecorder(uow)

    async def execute(self, caller: Caller, command: CreateAMLCheckCommand) -> Result[Dict[str, Any]]:
        async with self.uow:
            client = await self.uow.clients.get_for_firm(caller.firm_id, command.client_id)
            if client is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Client not found"))

        check = AMLCheck(
            firm_id=caller.firm_id,
            client_id=command.client_id,
            check_type=command.check_type,
            check_status=command.status or AMLCheckStatus.pending,
            notes=command.notes,
        )

        if self.provider.enabled:
            try:
                screening = await self.provider.screen(
                    ScreeningRequest(
                        check_type=command.check_type.value,
                        name=command.name,
                        email=command.email,
                        date_of_birth=command.date_of_birth,
                        address=command.address,
                        reference=str(command.client_id),
                    )
                )
            except AMLProviderError as e:
                logger.error(f"[AML] Screening failed for client {command.client_id}: {e}")
                async with self.uow:
                    await self.audit.record(
                        AuditEvent(
                            firm_id=caller.firm_id,
                            event_type=AuditEventType.aml_check_failed.value,
                            entity_type="aml_check",
                            ip_address=caller.ip_address,
                            details={
                                "client_id": str(command.client_id),
                                "check_type": command.check_type.value,
                                "error": str(e),
                                "provider_status": e.status_code,
                            },
                            lawful_basis=lawful_basis.AML_KYC,
                        )
                    )
                return Return.err(
                    Error(
                        ErrorCode.UPSTREAM_UNAVAILABLE,
                        "AML service temporarily unavailable",
                        details={"status": AMLCheckStatus.pending.value},
                    )
                )

            check.check_status = screening.status
            check.risk_level = screening.risk_level
            check.risk_flags = screening.risk_flags
            check.provider_reference = screening.provider_reference
            check.checked_at = utc_now()

        async with self.uow:
            try:
                check = await self.uow.aml_checks.create(check)
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[AML] Failed to store check for client {command.client_id}: {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to save AML check"))

            payload = check.model_dump(mode="json")

            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    event_type=AuditEventType.create.value,
                    entity_type="aml_check",
                    entity_id=payload["id"],
                    ip_address=caller.ip_address,
                    details={
                        "client_id": str(command.client_id),
                        "check_type": command.check_type.value,
                        "status": payload["check_status"],
                        "risk_level": payload["risk_level"],
                        "api_key_prefix": caller.api_key_prefix,
                    },
                    lawful_basis=lawful_basis.AML_KYC,
                )
            )
            return Return.ok(payload)
