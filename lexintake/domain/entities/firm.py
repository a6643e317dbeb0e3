"""
Firm Entity

A law-firm customer; the unit of tenant isolation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from lexintake.domain.base import utc_now


class Firm(SQLModel, table=True):
    """
    Firm entity - the tenant.

    Business Rules:
    - Every tenant-scoped row carries firm_id
    - Never hard-deleted in the normal flow
    - API keys live in api_keys; api_key_rotated_at tracks the last rotation
    """

    __tablename__ = "firms"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    jurisdiction: Optional[str] = Field(default=None, max_length=50)

    api_key_rotated_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
