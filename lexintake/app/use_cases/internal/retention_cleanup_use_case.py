"""
Retention Cleanup Use Case

Periodic job (triggered by cron via /api/internal/cleanup).
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.libs.result import Result, Return

logger = logging.getLogger(__name__)


class RetentionCleanupUseCase:
    """
    Business Rules:
    - Marketing leads older than lead_retention_days are deleted
    - Expired sessions are deleted
    - The run is audited against the system firm (or globally when none is
      configured); each purge commits on its own
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lead_retention_days: int = 730,
        system_firm_id: Optional[UUID] = None,
    ):
        self.uow = uow
        self.audit = AuditRecorder(uow)
        self.lead_retention_days = lead_retention_days
        self.system_firm_id = system_firm_id

    async def execute(self, ip_address: Optional[str] = None) -> Result[Dict[str, Any]]:
        now = utc_now()
        cutoff = now - timedelta(days=self.lead_retention_days)

        async with self.uow:
            await self.audit.record(
                AuditEvent(
                    firm_id=self.system_firm_id,
                    event_type=AuditEventType.cleanup_run.value,
                    entity_type="system",
                    ip_address=ip_address,
                    details={"triggered_at": now.isoformat() + "Z", "source": "cron"},
                    lawful_basis=lawful_basis.DATA_RETENTION,
                )
            )

            leads = await self.uow.marketing_leads.delete_created_before(cutoff)
            await self.uow.commit()

            sessions = await self.uow.sessions.delete_expired(now)
            await self.uow.commit()

        logger.info(f"[CLEANUP] Deleted {leads} marketing leads and {sessions} expired sessions")
        return Return.ok({"marketing_leads": leads, "sessions": sessions})
