"""
Firm API Key Authentication

The gate in front of every /api/external endpoint:
per-address attempt limit -> key validation -> per-key limit -> scope.
"""

from fastapi import Depends, Header, Request

from lexintake.api.error import raise_for_error
from lexintake.api.utils.rate_limit import enforce_rate_limit, ip_identity
from lexintake.api.utils.request_context import client_ip
from lexintake.app.services.api_key_validator import ApiKeyValidator
from lexintake.app.services.rate_limiter import RateLimiter
from lexintake.app.services.scope_enforcer import enforce_scope
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.caller import Caller
from lexintake.depends import get_rate_limiter, get_unit_of_work
from lexintake.domain.entities import ApiScope

PRE_AUTH_CLASS = "api_key_auth"


def require_api_key(scope: ApiScope, operation_class: str = "external_api"):
    """
    Dependency factory for API-key endpoints.

    Returns a dependency resolving to the calling firm as a Caller, or raising
    the mapped ClientError (429, 401 or 403). The operation class quota is
    charged to the key only once it has been validated.
    """

    async def dependency(
        request: Request,
        x_firm_api_key: str = Header(None),
        limiter: RateLimiter = Depends(get_rate_limiter),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> Caller:
        await enforce_rate_limit(limiter, ip_identity(request), PRE_AUTH_CLASS)

        ip_address = client_ip(request)
        result = await ApiKeyValidator(uow).validate(x_firm_api_key, ip_address=ip_address)
        if result.is_err():
            raise_for_error(result.error)
        identity = result.value

        await enforce_rate_limit(
            limiter, RateLimiter.identity_for(identity.key_prefix, ip_address), operation_class
        )

        scope_result = enforce_scope(identity.scopes, scope)
        if scope_result.is_err():
            raise_for_error(scope_result.error)

        return Caller(
            firm_id=identity.firm_id,
            api_key_prefix=identity.key_prefix,
            ip_address=ip_address,
        )

    return dependency
