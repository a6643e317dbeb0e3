"""
Internal Shared-Secret Authentication

Guards operator endpoints (key rotation, retention cleanup). Different from
firm API keys and user sessions: this is service-to-service auth.
"""

import hmac
from typing import Optional

from fastapi import Header, status

from config import ApplicationConfig
from lexintake.api.error import ClientError
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error


def _check_shared_secret(supplied: Optional[str], expected: Optional[str]) -> None:
    if not supplied or not expected or not hmac.compare_digest(supplied.encode(), str(expected).encode()):
        raise ClientError(
            Error(ErrorCode.INVALID_CREDENTIAL, "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


async def verify_internal_admin_key(x_internal_admin_key: Optional[str] = Header(None)) -> bool:
    """
    Verify the X-Internal-Admin-Key header.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    _check_shared_secret(x_internal_admin_key, ApplicationConfig.INTERNAL_ADMIN_KEY)
    return True


async def verify_cleanup_key(x_cleanup_key: Optional[str] = Header(None)) -> bool:
    """Verify the X-Cleanup-Key header sent by the retention cron."""
    _check_shared_secret(x_cleanup_key, ApplicationConfig.INTERNAL_CLEANUP_KEY)
    return True
