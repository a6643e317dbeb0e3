from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """Request body base: unknown fields are a validation error."""

    model_config = ConfigDict(extra="forbid")
