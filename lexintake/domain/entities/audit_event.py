"""
AuditEvent Entity

Immutable log of who did what to which entity, from where, and why.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append-only.

    Business Rules:
    - Never updated or deleted; the one exception is nulling user_id when the
      actor's data is erased under GDPR
    - firm_id nullable for global events (public leads, unknown-key attempts)
    - lawful_basis records the GDPR justification for the processing
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    firm_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None, foreign_key="profiles.id", index=True)

    event_type: str = Field(max_length=100)  # e.g. "create", "export"
    entity_type: str = Field(max_length=100)  # e.g. "client", "aml_check"
    entity_id: Optional[str] = Field(default=None, max_length=64)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    lawful_basis: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_firm_event_type", "firm_id", "event_type"),
    )
