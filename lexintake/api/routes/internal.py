import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.admin_auth import verify_cleanup_key
from lexintake.api.utils.request_context import client_ip
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.internal import RetentionCleanupUseCase
from lexintake.depends import get_unit_of_work

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=f"{ApplicationConfig.API_PREFIX}/internal",
    tags=["Internal"],
    dependencies=[Depends(verify_cleanup_key)],
)


def _system_firm_id():
    if not ApplicationConfig.SYSTEM_FIRM_ID:
        return None
    try:
        return UUID(ApplicationConfig.SYSTEM_FIRM_ID)
    except ValueError:
        logger.warning(f"[CLEANUP] SYSTEM_FIRM_ID is not a UUID: {ApplicationConfig.SYSTEM_FIRM_ID}")
        return None


@router.post("/cleanup")
async def cleanup(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Retention Cleanup

    Called by the scheduler. Purges marketing leads past LEAD_RETENTION_DAYS
    and expired sessions.
    """
    use_case = RetentionCleanupUseCase(
        uow,
        lead_retention_days=ApplicationConfig.LEAD_RETENTION_DAYS,
        system_firm_id=_system_firm_id(),
    )
    result = await use_case.execute(ip_address=client_ip(request))
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "deleted": result.value}
