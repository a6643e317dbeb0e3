"""
Client Entity

A firm's end customer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now
from .enums import KYCStatus


class Client(SQLModel, table=True):
    """
    Client entity.

    Business Rules:
    - Always created with the caller's firm_id, never a client-supplied one
    - External integrations upsert by external_id, falling back to email
    - Deleted on GDPR request after its matters and AML checks
    """

    __tablename__ = "clients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)
    external_id: Optional[str] = Field(default=None, max_length=255)

    name: str = Field(max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    kyc_status: KYCStatus = Field(default=KYCStatus.pending)
    notes: Optional[str] = Field(default=None, max_length=5000)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_client_firm_external_id", "firm_id", "external_id"),
        Index("idx_client_firm_email", "firm_id", "email"),
    )
