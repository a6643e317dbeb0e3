from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import EmailStr, Field, model_validator

from lexintake.api.error import raise_for_error
from lexintake.api.utils.cookies import clear_session_cookies, set_session_cookies
from lexintake.api.utils.jwt import create_session_token
from lexintake.api.utils.rate_limit import rate_limited
from lexintake.api.utils.request_context import client_ip
from lexintake.api.utils.strict_model import StrictRequest
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.auth import SigninUseCase, SignoutUseCase, SignupCommand, SignupUseCase
from lexintake.app.use_cases.caller import Caller
from lexintake.depends import get_current_session, get_unit_of_work
from config import ApplicationConfig

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(StrictRequest):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=255)
    confirm_password: str
    firm_name: str = Field(..., min_length=2, max_length=255)
    jurisdiction: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest, request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Firm Signup

    Creates a firm and its owner profile. The owner signs in separately.

    Raises:
        - 400 Bad Request: Invalid input or passwords do not match
        - 409 Conflict: Email already registered
    """
    command = SignupCommand(
        email=body.email,
        password=body.password,
        firm_name=body.firm_name,
        jurisdiction=body.jurisdiction,
    )
    result = await SignupUseCase(uow).execute(command, ip_address=client_ip(request))
    if result.is_err():
        raise_for_error(result.error)

    return {
        "success": True,
        "firm_id": str(result.value.firm_id),
        "user_id": str(result.value.user_id),
    }


class SigninRequest(StrictRequest):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


@router.post("/signin", dependencies=[Depends(rate_limited("signin"))])
async def signin(
    body: SigninRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Dashboard Sign-in

    Sets firm_id, user_id and session_token cookies on success.

    Raises:
        - 401 Unauthorized: Invalid email or password (never says which)
        - 429 Too Many Requests: Sign-in limit for this address exceeded
    """
    use_case = SigninUseCase(uow, session_ttl_days=ApplicationConfig.SESSION_TTL_DAYS)
    result = await use_case.execute(body.email, body.password, ip_address=client_ip(request))
    if result.is_err():
        raise_for_error(result.error)

    signed_in = result.value
    token = create_session_token(
        signed_in.session_id, signed_in.user_id, signed_in.firm_id, signed_in.expires_at
    )
    set_session_cookies(response, str(signed_in.firm_id), str(signed_in.user_id), token)
    return {"success": True}


@router.post("/signout")
async def signout(
    response: Response,
    caller: Caller = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SignoutUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)

    clear_session_cookies(response)
    return {"success": True}
