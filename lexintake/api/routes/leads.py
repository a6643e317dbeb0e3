from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.rate_limit import rate_limited
from lexintake.api.utils.request_context import client_ip
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.leads import (
    CaptureLeadCommand,
    CaptureLeadResponse,
    CaptureLeadUseCase,
    ListLeadsUseCase,
)
from lexintake.depends import get_current_session, get_unit_of_work
from lexintake.domain.entities import LeadSource

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/leads", tags=["Leads"])
public_router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/public/leads", tags=["Leads"])


class LeadRequest(StrictRequest):
    # Checked for "@" by the use case so a bad address is never stored
    email: str = Field(..., max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    firm_name: Optional[str] = Field(None, max_length=255)
    state: Optional[str] = Field(None, max_length=50)


def lead_saved_body(captured: CaptureLeadResponse, response: Response) -> dict:
    if not captured.created:
        response.status_code = status.HTTP_200_OK
        return {"message": "Email already registered"}
    response.status_code = status.HTTP_201_CREATED
    return {"message": "Lead saved", "lead_id": str(captured.lead_id)}


@router.get("")
async def list_leads(
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListLeadsUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_lead(
    body: LeadRequest,
    response: Response,
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Record a lead for the signed-in user's firm."""
    result = await CaptureLeadUseCase(uow).execute(
        CaptureLeadCommand(**body.model_dump()),
        source=LeadSource.dashboard,
        firm_id=caller.firm_id,
        user_id=caller.user_id,
        ip_address=caller.ip_address,
    )
    if result.is_err():
        raise_for_error(result.error)
    return lead_saved_body(result.value, response)


@public_router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(rate_limited("public_lead"))]
)
async def create_public_lead(
    body: LeadRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Marketing-site lead capture. Unauthenticated; limited per client address.

    Raises:
        - 400 Bad Request: Email missing or without "@"
        - 429 Too Many Requests
    """
    result = await CaptureLeadUseCase(uow).execute(
        CaptureLeadCommand(**body.model_dump()),
        source=LeadSource.public_site,
        ip_address=client_ip(request),
    )
    if result.is_err():
        raise_for_error(result.error)
    return lead_saved_body(result.value, response)
