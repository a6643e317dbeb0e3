from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from pydantic import Field

from config import ApplicationConfig
from lexintake.api.error import raise_for_error
from lexintake.api.utils.admin_auth import verify_internal_admin_key
from lexintake.api.utils.rate_limit import rate_limited
from lexintake.api.utils.request_context import client_ip
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.firms import RevokeApiKeyUseCase, RotateApiKeyUseCase
from lexintake.depends import get_unit_of_work

router = APIRouter(
    prefix=f"{ApplicationConfig.API_PREFIX}/firms",
    tags=["Firms"],
    dependencies=[Depends(rate_limited("sensitive")), Depends(verify_internal_admin_key)],
)


class RotateApiKeyRequest(StrictRequest):
    firm_id: UUID
    scopes: Optional[List[str]] = Field(None, min_length=1)


class RevokeApiKeyRequest(StrictRequest):
    firm_id: UUID
    key_prefix: Optional[str] = Field(None, max_length=32)


@router.post("/rotate-api-key")
async def rotate_api_key(
    body: RotateApiKeyRequest, request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Rotate API Key

    Deactivates the firm's active keys and issues a new one. The plaintext key
    appears in this response only.

    Raises:
        - 401 Unauthorized: Missing or wrong x-internal-admin-key
        - 400 Bad Request: Unknown scope
        - 404 Not Found: Firm not found
    """
    use_case = RotateApiKeyUseCase(
        uow,
        ttl_days=ApplicationConfig.API_KEY_TTL_DAYS,
        default_scopes=ApplicationConfig.DEFAULT_API_KEY_SCOPES,
    )
    result = await use_case.execute(body.firm_id, scopes=body.scopes, ip_address=client_ip(request))
    if result.is_err():
        raise_for_error(result.error)
    return result.value.model_dump(mode="json")


@router.post("/revoke-api-key")
async def revoke_api_key(
    body: RevokeApiKeyRequest, request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
):
    result = await RevokeApiKeyUseCase(uow).execute(
        body.firm_id, key_prefix=body.key_prefix, ip_address=client_ip(request)
    )
    if result.is_err():
        raise_for_error(result.error)
    return {"success": True, **result.value}
