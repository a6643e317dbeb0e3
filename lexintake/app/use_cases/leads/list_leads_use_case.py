from typing import Any, Dict

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.libs.result import Result, Return


class ListLeadsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[Dict[str, Any]]:
        async with self.uow:
            leads = await self.uow.marketing_leads.list_by_firm(caller.firm_id)
            data = [lead.model_dump(mode="json") for lead in leads]
            return Return.ok({"data": data, "count": len(data)})
