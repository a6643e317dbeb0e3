"""
AML Check Use Case DTOs
"""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from lexintake.domain.entities import AMLCheckStatus, AMLCheckType, RiskLevel


class CreateAMLCheckCommand(BaseModel):
    client_id: UUID
    check_type: AMLCheckType
    status: Optional[AMLCheckStatus] = None
    name: str
    email: str
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class UpdateAMLCheckCommand(BaseModel):
    status: Optional[AMLCheckStatus] = None
    risk_level: Optional[RiskLevel] = None
    notes: Optional[str] = None
