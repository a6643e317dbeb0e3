from typing import Optional

from fastapi import Depends, Request

from lexintake.api.error import raise_for_error
from lexintake.api.utils.request_context import client_ip
from lexintake.app.services.rate_limiter import RateLimitDecision, RateLimiter
from lexintake.depends import get_rate_limiter
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error


def ip_identity(request: Request) -> str:
    """ip:<address>; unverified credentials never pick the bucket."""
    return RateLimiter.identity_for(None, client_ip(request))


def rate_limit_headers(decision: RateLimitDecision) -> dict:
    headers = {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(int(decision.reset_at)),
    }
    if not decision.allowed:
        headers["Retry-After"] = str(decision.retry_after)
    return headers


async def enforce_rate_limit(
    limiter: RateLimiter, identity: str, operation_class: str
) -> RateLimitDecision:
    decision = await limiter.check(identity, operation_class)
    if not decision.allowed:
        raise_for_error(
            Error(
                ErrorCode.RATE_LIMITED,
                "Too many requests. Please try again later.",
                reason=operation_class,
                details={"retry_after": decision.retry_after},
            ),
            headers=rate_limit_headers(decision),
        )
    return decision


def rate_limited(operation_class: str):
    """
    Dependency factory applying one operation class's limit per client address.

    Usage:
        @router.post("/signin", dependencies=[Depends(rate_limited("signin"))])
    """

    async def dependency(
        request: Request, limiter: RateLimiter = Depends(get_rate_limiter)
    ) -> Optional[RateLimitDecision]:
        return await enforce_rate_limit(limiter, ip_identity(request), operation_class)

    return dependency
