"""
Audit Recorder

Appends audit events in their own commit so that a failed audit write can
never undo, or abort, the business write that triggered it.
"""

import logging

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class AuditRecorder:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(self, event: AuditEvent) -> None:
        """
        Persist an audit event. Never raises.

        Must be called after the business transaction has been committed:
        on failure the session is rolled back, which only discards the
        audit row itself.
        """
        try:
            await self.uow.audit_events.create(event)
            await self.uow.commit()
        except Exception as exc:
            logger.error(
                f"[AUDIT] Failed to record {event.event_type}/{event.entity_type} "
                f"for firm {event.firm_id}: {exc!r}"
            )
            try:
                await self.uow.rollback()
            except Exception as rollback_exc:
                logger.error(f"[AUDIT] Rollback after failed audit write failed: {rollback_exc!r}")
