"""
AMLCheck Entity

A compliance screening result for a client.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now
from .enums import AMLCheckStatus, AMLCheckType, RiskLevel


class AMLCheck(SQLModel, table=True):
    """
    AMLCheck entity.

    Business Rules:
    - Immutable once written, except check_status and notes
    - check_status: pending -> passed | flagged | escalated (terminal)
    """

    __tablename__ = "aml_checks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)
    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)

    check_type: AMLCheckType
    check_status: AMLCheckStatus = Field(default=AMLCheckStatus.pending)
    risk_level: Optional[RiskLevel] = None
    risk_flags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    provider_reference: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=5000)

    checked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_aml_firm_client", "firm_id", "client_id"),)
