from typing import Any, Dict, Optional
from uuid import UUID

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return


class GetAMLChecksUseCase:
    """Fetch one check by id, or list the firm's checks (optionally for one client)."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        caller: Caller,
        check_id: Optional[UUID] = None,
        client_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            if check_id is not None:
                check = await self.uow.aml_checks.get_for_firm(caller.firm_id, check_id)
                if check is None:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "AML check not found"))
                return Return.ok(check.model_dump(mode="json"))

            checks = await self.uow.aml_checks.list_by_firm(
                caller.firm_id, client_id=client_id, limit=limit, offset=offset
            )
            data = [c.model_dump(mode="json") for c in checks]
            return Return.ok({"data": data, "count": len(data)})
