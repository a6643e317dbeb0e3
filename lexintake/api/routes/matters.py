from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.app.use_cases.matters import (
    CreateMatterCommand,
    CreateMatterUseCase,
    ListMattersUseCase,
)
from lexintake.depends import get_current_session, get_unit_of_work
from lexintake.domain.entities import MatterStatus, MatterType

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/matters", tags=["Matters"])


class CreateMatterRequest(StrictRequest):
    client_id: UUID
    title: str = Field(..., min_length=5, max_length=255)
    matter_type: MatterType = MatterType.other
    status: MatterStatus = MatterStatus.open
    description: Optional[str] = Field(None, max_length=5000)
    external_ref: Optional[str] = Field(None, max_length=255)
    expected_closing_date: Optional[date] = None
    deletion_due_date: Optional[date] = None


@router.get("")
async def list_matters(
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMattersUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_matter(
    body: CreateMatterRequest,
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Open a matter for one of the firm's clients.

    Raises:
        - 404 Not Found: client_id is not a client of this firm
    """
    result = await CreateMatterUseCase(uow).execute(caller, CreateMatterCommand(**body.model_dump()))
    if result.is_err():
        raise_for_error(result.error)
    return result.value
