from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import EmailStr, Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.clients import (
    CreateClientCommand,
    CreateClientUseCase,
    ListClientsUseCase,
)
from lexintake.depends import get_current_session, get_unit_of_work
from lexintake.domain.entities import KYCStatus

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/clients", tags=["Clients"])

PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"


class CreateClientRequest(StrictRequest):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    kyc_status: KYCStatus = KYCStatus.pending
    notes: Optional[str] = Field(None, max_length=5000)


@router.get("")
async def list_clients(
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the signed-in user's firm's clients as {data, count}."""
    result = await ListClientsUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(
    body: CreateClientRequest,
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CreateClientUseCase(uow).execute(caller, CreateClientCommand(**body.model_dump()))
    if result.is_err():
        raise_for_error(result.error)
    return result.value
