"""
Lead Use Cases
"""

from .capture_lead_use_case import CaptureLeadUseCase
from .dtos import CaptureLeadCommand, CaptureLeadResponse
from .list_leads_use_case import ListLeadsUseCase

__all__ = [
    "CaptureLeadUseCase",
    "ListLeadsUseCase",
    "CaptureLeadCommand",
    "CaptureLeadResponse",
]
