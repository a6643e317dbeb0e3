"""
Matter Use Case DTOs
"""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from lexintake.domain.entities import MatterStatus, MatterType


class CreateMatterCommand(BaseModel):
    client_id: UUID
    title: str
    matter_type: MatterType = MatterType.other
    status: MatterStatus = MatterStatus.open
    description: Optional[str] = None
    external_ref: Optional[str] = None
    expected_closing_date: Optional[date] = None
    deletion_due_date: Optional[date] = None


class UpdateExternalMatterCommand(BaseModel):
    """
    Only fields explicitly set are applied; an explicit null clears a date.
    """

    matter_id: Optional[UUID] = None
    matter_external_ref: Optional[str] = None
    status: Optional[MatterStatus] = None
    expected_closing_date: Optional[date] = None
    deletion_due_date: Optional[date] = None
