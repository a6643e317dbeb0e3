"""
ApiKey Entity

A credential bound to a firm for external integrations.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from lexintake.domain.base import utc_now


class ApiKey(SQLModel, table=True):
    """
    ApiKey entity.

    Business Rules:
    - Plaintext is shown once at issuance; only salt + HMAC-SHA256 digest stored
    - key_prefix is non-secret and used for indexed lookup
    - One active key per firm; rotation deactivates every previous key
    """

    __tablename__ = "api_keys"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    firm_id: UUID = Field(foreign_key="firms.id", nullable=False, index=True)

    key_prefix: str = Field(unique=True, index=True, max_length=16)
    key_salt: str = Field(max_length=64)
    key_hash: str = Field(max_length=64)
    scopes: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_active: bool = Field(default=True)
    rotation_count: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_api_key_firm_active", "firm_id", "is_active"),)
