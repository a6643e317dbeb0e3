"""
Lead Use Case DTOs
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class CaptureLeadCommand(BaseModel):
    email: str
    full_name: Optional[str] = None
    firm_name: Optional[str] = None
    state: Optional[str] = None


class CaptureLeadResponse(BaseModel):
    created: bool
    lead_id: Optional[UUID] = None
