from typing import Callable, Literal

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.cookies import clear_session_cookies
from lexintake.api.utils.firm_api_key import require_api_key
from lexintake.api.utils.rate_limit import rate_limited
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.gdpr import (
    DataExport,
    DeleteMyDataUseCase,
    ExportFirmDataUseCase,
    ExportMyDataUseCase,
)
from lexintake.depends import get_current_session, get_unit_of_work, get_unit_of_work_factory
from lexintake.domain.entities import ApiScope

router = APIRouter(
    prefix=f"{ApplicationConfig.API_PREFIX}/gdpr",
    tags=["GDPR"],
    dependencies=[Depends(rate_limited("sensitive"))],
)
external_router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/external/gdpr", tags=["GDPR"])


class DeleteMyDataRequest(StrictRequest):
    confirm_password: str = Field(..., min_length=1)
    confirm_delete: Literal[True]


def attachment(export: DataExport) -> JSONResponse:
    return JSONResponse(
        content=export.payload,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


async def _export_firm(
    caller: Caller, uow: UnitOfWork, uow_factory: Callable[[], UnitOfWork]
) -> JSONResponse:
    result = await ExportFirmDataUseCase(uow, uow_factory).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return attachment(result.value)


@router.get("/export")
async def export_firm_data(
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    uow_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory),
):
    """
    Export all of the firm's data (GDPR Articles 15 & 20) as a JSON attachment.
    """
    return await _export_firm(caller, uow, uow_factory)


@router.get("/export/me")
async def export_my_data(
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExportMyDataUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return attachment(result.value)


@router.post("/delete-my-data")
async def delete_my_data(
    body: DeleteMyDataRequest,
    response: Response,
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete My Data

    Erases the firm's records and the owner's profile. Audit events are kept
    with the requester de-identified.

    Raises:
        - 401 Unauthorized: No valid session or wrong confirm_password
        - 403 Forbidden: Caller is not the firm owner
    """
    result = await DeleteMyDataUseCase(uow).execute(caller, body.confirm_password)
    if result.is_err():
        raise_for_error(result.error)

    report = result.value
    clear_session_cookies(response)
    body = {
        "success": report.success,
        "deleted": report.deleted,
        "deidentified_audit_events": report.deidentified_audit_events,
    }
    if report.failed_steps:
        body["failed_steps"] = report.failed_steps
    if report.error:
        body["error"] = report.error
    return body


@external_router.get("/export")
async def export_firm_data_external(
    caller: Caller = Depends(require_api_key(ApiScope.gdpr_export, operation_class="sensitive")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    uow_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory),
):
    return await _export_firm(caller, uow, uow_factory)
