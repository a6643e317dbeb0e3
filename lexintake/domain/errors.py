"""
Error codes returned by use cases.

The API layer maps each code to an HTTP status (see lexintake.api.error).
"""

from enum import Enum


class ErrorCode(str, Enum):
    # Credentials
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"

    # API key validation failures
    MISSING_KEY = "MISSING_KEY"
    MALFORMED_KEY = "MALFORMED_KEY"
    UNKNOWN_KEY = "UNKNOWN_KEY"
    EXPIRED_KEY = "EXPIRED_KEY"
    REVOKED_KEY = "REVOKED_KEY"

    # Authorization
    INSUFFICIENT_SCOPE = "INSUFFICIENT_SCOPE"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"
    RATE_LIMITED = "RATE_LIMITED"

    # Input and state
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"

    # Infrastructure
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    UNEXPECTED = "UNEXPECTED"
