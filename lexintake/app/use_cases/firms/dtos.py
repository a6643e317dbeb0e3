from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel


class RotatedApiKey(BaseModel):
    """Plaintext is only ever present in this response"""

    firm_id: UUID
    api_key: str
    key_prefix: str
    scopes: List[str]
    expires_at: datetime
    rotation_count: int
