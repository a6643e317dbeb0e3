"""
Export Firm Data Use Case

GDPR Articles 15 & 20: everything stored for a firm, as one JSON document.
"""

import asyncio
import time
from typing import Any, Callable, Dict, List
from uuid import UUID

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.libs.result import Result, Return

from .dtos import DataExport

EXPORTED_TABLES = ("clients", "matters", "aml_checks", "audit_events", "marketing_leads")


class ExportFirmDataUseCase:
    """
    Business Rules:
    - The five firm tables are read concurrently, each in its own unit of work
    - Only rows of the caller's firm are exported
    - The export is audited with total_<table> counts equal to the exported
      list lengths; the export's own audit row is not part of the export
    """

    def __init__(self, uow: UnitOfWork, uow_factory: Callable[[], UnitOfWork]):
        self.uow = uow
        self.uow_factory = uow_factory
        self.audit = AuditRecorder(uow)

    async def _fetch(self, table: str, firm_id: UUID) -> List[Dict[str, Any]]:
        async with self.uow_factory() as uow:
            repository = getattr(uow, table)
            rows = await repository.list_by_firm(firm_id)
            return [row.model_dump(mode="json") for row in rows]

    async def execute(self, caller: Caller) -> Result[DataExport]:
        results = await asyncio.gather(
            *(self._fetch(table, caller.firm_id) for table in EXPORTED_TABLES)
        )
        tables = dict(zip(EXPORTED_TABLES, results))

        payload: Dict[str, Any] = {
            "exported_at": utc_now().isoformat() + "Z",
            "firm_id": str(caller.firm_id),
            **tables,
        }
        totals = {f"total_{table}": len(rows) for table, rows in tables.items()}

        async with self.uow:
            await self.audit.record(
                AuditEvent(
                    firm_id=caller.firm_id,
                    user_id=caller.user_id,
                    event_type=AuditEventType.export.value,
                    entity_type="firm",
                    entity_id=str(caller.firm_id),
                    ip_address=caller.ip_address,
                    details={**totals, "via": "api-key" if caller.api_key_prefix else "dashboard"},
                    lawful_basis=lawful_basis.DATA_EXPORT,
                )
            )

        filename = f"gdpr_export_{caller.firm_id}_{int(time.time() * 1000)}.json"
        return Return.ok(DataExport(filename=filename, payload=payload))
