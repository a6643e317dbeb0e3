"""
GDPR Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DataExport(BaseModel):
    """A JSON document to be served as an attachment"""

    filename: str
    payload: Dict[str, Any]


class DeletionReport(BaseModel):
    success: bool
    deleted: Dict[str, int] = Field(default_factory=dict)
    deidentified_audit_events: int = 0
    failed_steps: List[str] = Field(default_factory=list)
    error: Optional[str] = None
