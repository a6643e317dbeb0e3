from typing import Any, Dict

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.libs.result import Result, Return


class ListMattersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[Dict[str, Any]]:
        async with self.uow:
            matters = await self.uow.matters.list_by_firm(caller.firm_id)
            data = [m.model_dump(mode="json") for m in matters]
            return Return.ok({"data": data, "count": len(data)})
