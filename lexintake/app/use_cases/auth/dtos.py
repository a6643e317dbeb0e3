"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes
    (password confirmation already checked).
    """

    email: str
    password: str
    firm_name: str
    jurisdiction: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class SignupResponse(BaseModel):
    """Response for signup use case"""

    firm_id: UUID
    user_id: UUID


class SigninResponse(BaseModel):
    """Response for sign-in use case; the API layer turns it into cookies"""

    session_id: UUID
    firm_id: UUID
    user_id: UUID
    role: str
    expires_at: datetime


class SessionContext(BaseModel):
    """An authenticated dashboard session"""

    session_id: UUID
    firm_id: UUID
    user_id: UUID
    role: str
