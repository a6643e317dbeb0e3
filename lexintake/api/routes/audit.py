from typing import Optional

from fastapi import APIRouter, Depends, Query

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.audit import GetAuditEventsUseCase
from lexintake.app.use_cases.caller import Caller
from lexintake.depends import get_current_session, get_unit_of_work

router = APIRouter(prefix=ApplicationConfig.API_PREFIX, tags=["Audit"])


@router.get("/audit-events")
async def get_audit_events(
    limit: int = Query(50, ge=1, le=200),
    cursor: Optional[str] = Query(None),
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Audit Events

    Firm owners only. Newest first, cursor-paginated.

    Raises:
        - 401 Unauthorized: No valid session
        - 403 Forbidden: Caller is not the firm owner
    """
    result = await GetAuditEventsUseCase(uow).execute(caller, limit=limit, cursor=cursor)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
