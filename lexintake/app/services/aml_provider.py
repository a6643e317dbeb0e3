from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from lexintake.domain.entities.enums import AMLCheckStatus, RiskLevel


class ScreeningRequest(BaseModel):
    check_type: str
    name: str
    email: str
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    reference: Optional[str] = None


class ScreeningResult(BaseModel):
    """Provider verdict translated into our own vocabulary"""

    status: AMLCheckStatus
    risk_level: Optional[RiskLevel] = None
    risk_flags: List[str] = Field(default_factory=list)
    provider_reference: Optional[str] = None


class AMLProviderError(Exception):
    """Raised when the provider could not produce a verdict."""

    def __init__(self, message: str, status_code: Optional[int] = None, retryable: bool = True):
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


# provider outcome -> stored check status
PROVIDER_STATUS_MAP = {
    "passed": AMLCheckStatus.passed,
    "failed": AMLCheckStatus.flagged,
    "manual_review": AMLCheckStatus.escalated,
}


def map_provider_status(raw: Optional[str]) -> AMLCheckStatus:
    if not isinstance(raw, str):
        return AMLCheckStatus.pending
    return PROVIDER_STATUS_MAP.get(raw.lower(), AMLCheckStatus.pending)


class IAMLProvider(ABC):
    @property
    @abstractmethod
    def enabled(self) -> bool:
        pass

    @abstractmethod
    async def screen(self, request: ScreeningRequest) -> ScreeningResult:
        """Raises AMLProviderError once retries are exhausted."""
        pass


class DisabledAMLProvider(IAMLProvider):
    """Used when AML_ENABLED is off; handlers store the caller-supplied status."""

    @property
    def enabled(self) -> bool:
        return False

    async def screen(self, request: ScreeningRequest) -> ScreeningResult:
        raise AMLProviderError("AML provider is disabled", retryable=False)
