"""
Session Entity

Server-side record behind the session cookies.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - one per successful sign-in.

    Business Rules:
    - The session_token cookie names this row; revoked or expired rows reject
    - Expires after SESSION_TTL_DAYS (7 by default)
    - Removed first on GDPR erasure
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    profile_id: UUID = Field(foreign_key="profiles.id", nullable=False, index=True)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    revoked: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
