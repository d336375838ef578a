"""Common response envelopes."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorEnvelope(BaseModel):
    """Uniform error body returned by every route."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    message: str
    request_id: Optional[str] = Field(default=None, alias="requestId")
