from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.firm_api_key import require_api_key
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.aml_provider import IAMLProvider
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.aml import (
    CreateAMLCheckCommand,
    CreateAMLCheckUseCase,
    GetAMLChecksUseCase,
    UpdateAMLCheckCommand,
    UpdateAMLCheckUseCase,
)
from lexintake.app.use_cases.caller import Caller
from lexintake.depends import get_aml_provider, get_unit_of_work
from lexintake.domain.entities import AMLCheckStatus, AMLCheckType, ApiScope, RiskLevel

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/external/aml/checks", tags=["AML"])

aml_read = require_api_key(ApiScope.aml_read, operation_class="aml_check")
aml_write = require_api_key(ApiScope.aml_write, operation_class="aml_check")


class CreateAMLCheckRequest(StrictRequest):
    client_id: UUID
    check_type: AMLCheckType
    status: Optional[AMLCheckStatus] = None
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    date_of_birth: Optional[date] = None
    address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=5000)


class UpdateAMLCheckRequest(StrictRequest):
    status: Optional[AMLCheckStatus] = None
    risk_level: Optional[RiskLevel] = None
    notes: Optional[str] = Field(None, max_length=5000)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_aml_check(
    body: CreateAMLCheckRequest,
    caller: Caller = Depends(aml_write),
    uow: UnitOfWork = Depends(get_unit_of_work),
    provider: IAMLProvider = Depends(get_aml_provider),
):
    """
    Create AML Check

    Screens the client with the AML provider when enabled and stores the outcome.

    Raises:
        - 404 Not Found: client_id does not belong to the calling firm
        - 503 Service Unavailable: Provider failed after retries
    """
    result = await CreateAMLCheckUseCase(uow, provider).execute(
        caller, CreateAMLCheckCommand(**body.model_dump())
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("")
async def get_aml_checks(
    id: Optional[UUID] = Query(None),
    client_id: Optional[UUID] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    caller: Caller = Depends(aml_read),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """A single check when id is given, otherwise {data, count}."""
    result = await GetAMLChecksUseCase(uow).execute(
        caller, check_id=id, client_id=client_id, limit=limit, offset=offset
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{check_id}")
async def update_aml_check(
    check_id: UUID,
    body: UpdateAMLCheckRequest,
    caller: Caller = Depends(aml_write),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateAMLCheckUseCase(uow).execute(
        caller, check_id, UpdateAMLCheckCommand(**body.model_dump())
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
