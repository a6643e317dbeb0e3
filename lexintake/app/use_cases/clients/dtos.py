"""
Client Use Case DTOs
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from lexintake.domain.entities import KYCStatus


class CreateClientCommand(BaseModel):
    """Dashboard client intake"""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    kyc_status: KYCStatus = KYCStatus.pending
    notes: Optional[str] = None


class UpsertExternalClientCommand(BaseModel):
    """Integration client upsert; external_id or email must be present"""

    external_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class UpsertClientResponse(BaseModel):
    created: bool
    client: Dict[str, Any]
