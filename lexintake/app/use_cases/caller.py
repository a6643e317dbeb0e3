from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Caller(BaseModel):
    """Who is acting: a signed-in profile or a firm API key, plus origin."""

    firm_id: UUID
    session_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    role: Optional[str] = None
    api_key_prefix: Optional[str] = None
    ip_address: Optional[str] = None
