"""
Integration endpoints authenticated with the x-firm-api-key header.

Every handler receives the calling firm as a Caller from require_api_key;
the firm is never taken from the request body.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.firm_api_key import require_api_key
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.email_sender import IEmailSender
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.clients import UpsertExternalClientCommand, UpsertExternalClientUseCase
from lexintake.app.use_cases.leads import CaptureLeadCommand, CaptureLeadUseCase
from lexintake.app.use_cases.matters import (
    ExportMattersUseCase,
    UpdateExternalMatterCommand,
    UpdateExternalMatterUseCase,
)
from lexintake.depends import get_email_sender, get_unit_of_work
from lexintake.domain.entities import ApiScope, LeadSource, MatterStatus

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/external", tags=["External"])


class ExternalClientRequest(StrictRequest):
    external_id: Optional[str] = Field(None, max_length=255)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address_line_1: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip: Optional[str] = Field(None, max_length=20)


class ExternalLeadRequest(StrictRequest):
    email: str = Field(..., max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    firm_name: Optional[str] = Field(None, max_length=255)
    state: Optional[str] = Field(None, max_length=50)


class ExternalMatterUpdateRequest(StrictRequest):
    matter_id: Optional[UUID] = None
    matter_external_ref: Optional[str] = Field(None, max_length=255)
    status: Optional[MatterStatus] = None
    expected_closing_date: Optional[date] = None
    deletion_due_date: Optional[date] = None


@router.post("/clients", status_code=status.HTTP_201_CREATED)
async def upsert_client(
    body: ExternalClientRequest,
    response: Response,
    caller: Caller = Depends(require_api_key(ApiScope.clients_write)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create or update a client, matched by external_id then email.

    Returns 201 when a client was created and 200 when an existing one was updated.
    """
    command = UpsertExternalClientCommand(
        external_id=body.external_id,
        name=body.full_name,
        email=body.email,
        phone=body.phone,
        address=body.address_line_1,
        city=body.city,
        state=body.state,
        zip_code=body.zip,
    )
    result = await UpsertExternalClientUseCase(uow).execute(caller, command)
    if result.is_err():
        raise_for_error(result.error)

    upserted = result.value
    if not upserted.created:
        response.status_code = status.HTTP_200_OK
    return {"success": True, "created": upserted.created, "client": upserted.client}


@router.post("/leads", status_code=status.HTTP_201_CREATED)
async def capture_lead(
    body: ExternalLeadRequest,
    response: Response,
    caller: Caller = Depends(require_api_key(ApiScope.leads_write, operation_class="leads")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    result = await CaptureLeadUseCase(uow, email_sender=email_sender).execute(
        CaptureLeadCommand(**body.model_dump()),
        source=LeadSource.firm_integration,
        firm_id=caller.firm_id,
        ip_address=caller.ip_address,
    )
    if result.is_err():
        raise_for_error(result.error)

    captured = result.value
    if not captured.created:
        response.status_code = status.HTTP_200_OK
        return {"message": "Email already registered"}
    return {"success": True, "id": str(captured.lead_id)}


@router.post("/matters")
async def update_matter(
    body: ExternalMatterUpdateRequest,
    caller: Caller = Depends(require_api_key(ApiScope.matters_write)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    # exclude_unset keeps an explicit null date distinct from an absent one
    command = UpdateExternalMatterCommand(**body.model_dump(exclude_unset=True))
    result = await UpdateExternalMatterUseCase(uow).execute(caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, "matter": result.value}


@router.get("/export/matters")
async def export_matters(
    limit: int = Query(1000),
    offset: int = Query(0),
    caller: Caller = Depends(require_api_key(ApiScope.matters_read)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Paginated matter feed for the calling firm; limit 1-5000."""
    result = await ExportMattersUseCase(uow).execute(caller, limit=limit, offset=offset)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
