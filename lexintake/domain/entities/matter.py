"""
Matter Entity

A legal engagement tied to a client.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now
from .enums import MatterStatus, MatterType


class Matter(SQLModel, table=True):
    """
    Matter entity.

    Business Rules:
    - client_id must reference a client of the same firm
    - status moves through open/in_progress/pending/closed/on_hold/cancelled
    - deletion_due_date drives retention
    """

    __tablename__ = "matters"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)
    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    external_ref: Optional[str] = Field(default=None, max_length=255)

    title: str = Field(max_length=255)
    matter_type: MatterType = Field(default=MatterType.other)
    status: MatterStatus = Field(default=MatterStatus.open)
    description: Optional[str] = Field(default=None, max_length=5000)

    expected_closing_date: Optional[date] = None
    deletion_due_date: Optional[date] = None

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_matter_firm_status", "firm_id", "status"),
        Index("idx_matter_firm_external_ref", "firm_id", "external_ref"),
    )
