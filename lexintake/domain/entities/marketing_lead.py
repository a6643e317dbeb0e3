"""
MarketingLead Entity

A prospective customer contact.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now
from .enums import LeadSource


class MarketingLead(SQLModel, table=True):
    """
    MarketingLead entity.

    Business Rules:
    - firm_id is null for leads captured on the public marketing site
    - One lead per (firm_id, email)
    - Purged by the retention job after LEAD_RETENTION_DAYS
    """

    __tablename__ = "marketing_leads"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firm_id: Optional[UUID] = Field(default=None, foreign_key="firms.id", index=True)

    email: str = Field(max_length=255, index=True)
    full_name: Optional[str] = Field(default=None, max_length=255)
    firm_name: Optional[str] = Field(default=None, max_length=255)
    state: Optional[str] = Field(default=None, max_length=50)
    source: LeadSource = Field(default=LeadSource.public_site)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_lead_created_at", "created_at"),)
