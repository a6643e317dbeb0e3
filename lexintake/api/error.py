from typing import Mapping, Optional

from fastapi import status

from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = dict(headers or {})
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


CLIENT_ERROR_STATUS = {
    ErrorCode.MISSING_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MISSING_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MALFORMED_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNKNOWN_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EXPIRED_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.REVOKED_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INSUFFICIENT_SCOPE: status.HTTP_403_FORBIDDEN,
    ErrorCode.INSUFFICIENT_ROLE: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATUS_TRANSITION: status.HTTP_400_BAD_REQUEST,
}

SERVER_ERROR_STATUS = {
    ErrorCode.UPSTREAM_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_error(error: Error, headers: Optional[Mapping[str, str]] = None) -> None:
    """Map a use-case error code to its HTTP exception."""
    if error.code in CLIENT_ERROR_STATUS:
        raise ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code], headers=headers)
    raise ServerError(
        error, status_code=SERVER_ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    )
