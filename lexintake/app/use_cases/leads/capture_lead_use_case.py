"""
Capture Lead Use Case

Marketing lead capture from the public site, a firm integration or the
dashboard.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.email_sender import IEmailSender
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType, LeadSource, MarketingLead
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import CaptureLeadCommand, CaptureLeadResponse

logger = logging.getLogger(__name__)


class CaptureLeadUseCase:
    """
    Business Rules:
    - Email must contain "@"; nothing is stored otherwise
    - One lead per (firm_id, email); public leads have firm_id null and are
      de-duplicated among themselves
    - A duplicate is reported, not an error
    - Integration leads trigger a welcome email; a failed send never fails
      the capture
    """

    def __init__(self, uow: UnitOfWork, email_sender: Optional[IEmailSender] = None):
        self.uow = uow
        self.email_sender = email_sender
        self.audit = AuditRecorder(uow)

    async def execute(
        self,
        command: CaptureLeadCommand,
        source: LeadSource,
        firm_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
        ip_address: Optional[str] = None,
    ) -> Result[CaptureLeadResponse]:
        email = (command.email or "").strip().lower()
        if "@" not in email:
            return Return.err(Error(ErrorCode.VALIDATION_FAILED, "Valid email is required"))

        async with self.uow:
            existing = await self.uow.marketing_leads.get_by_email(firm_id, email)
            if existing is not None:
                return Return.ok(CaptureLeadResponse(created=False, lead_id=existing.id))

            try:
                lead = await self.uow.marketing_leads.create(
                    MarketingLead(
                        firm_id=firm_id,
                        email=email,
                        full_name=command.full_name,
                        firm_name=command.firm_name,
                        state=command.state,
                        source=source,
                        ip_address=ip_address,
                    )
                )
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"[LEADS] Insert failed ({source.value}): {e!r}")
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.PERSISTENCE_FAILURE, "Failed to save lead"))

            lead_id = lead.id

            if self.email_sender is not None and source == LeadSource.firm_integration:
                sent = await self.email_sender.send_welcome_email(
                    email, command.firm_name or "Law Firm"
                )
                if not sent:
                    logger.warning(f"[LEADS] Welcome email not sent for lead {lead_id}")

            await self.audit.record(
                AuditEvent(
                    firm_id=firm_id,
                    user_id=user_id,
                    event_type=AuditEventType.create.value,
                    entity_type="marketing_lead",
                    entity_id=str(lead_id),
                    ip_address=ip_address,
                    details={
                        "source": source.value,
                        "email": email,
                        "firm_name": command.firm_name,
                        "state": command.state,
                    },
                    lawful_basis=lawful_basis.LEAD_GENERATION,
                )
            )
            return Return.ok(CaptureLeadResponse(created=True, lead_id=lead_id))
