"""
Get Audit Events Use Case

Retrieves audit events for a firm with pagination.
"""

from typing import Any, Dict, Optional

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain.entities import ProfileRole
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

MAX_PAGE_SIZE = 200


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a firm.

    Business Rules:
    - Caller must have role=firm_owner
    - Results are firm-scoped (only events for the caller's firm)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes the actor's email while the actor still exists
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, limit: int = 50, cursor: Optional[str] = None
    ) -> Result[Dict[str, Any]]:
        """
        Args:
            caller: Signed-in profile
            limit: Maximum number of events to return (1-200)
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        if caller.role != ProfileRole.firm_owner.value:
            return Return.err(
                Error(ErrorCode.INSUFFICIENT_ROLE, "You do not have permission to view audit events")
            )

        limit = max(1, min(limit, MAX_PAGE_SIZE))

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_by_firm_paginated(
                caller.firm_id, limit=limit, cursor=cursor
            )

            emails = {}
            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    if event.user_id not in emails:
                        profile = await self.uow.profiles.get_by_id(event.user_id)
                        emails[event.user_id] = profile.email if profile else None
                    user_email = emails[event.user_id]

                events_list.append(
                    {
                        "id": str(event.id),
                        "event_type": event.event_type,
                        "entity_type": event.entity_type,
                        "entity_id": event.entity_id,
                        "user_email": user_email,
                        "ip_address": event.ip_address,
                        "lawful_basis": event.lawful_basis,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "details": event.details or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
