"""
Profile Entity

A human operator within a firm.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now
from .enums import ProfileRole


class Profile(SQLModel, table=True):
    """
    Profile entity - a user belonging to exactly one firm.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash (cost factor 12)
    - Hard-deleted on a GDPR erasure request, after its audit trail is
      de-identified
    """

    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)
    role: ProfileRole = Field(default=ProfileRole.staff)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_profile_firm_role", "firm_id", "role"),)
