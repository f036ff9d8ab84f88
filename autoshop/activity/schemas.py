from typing import Any, Optional

from pydantic import BaseModel, Field


class CreateActivityRequest(BaseModel):
    """POST /activity-logs: user identity is taken from the session, not the body."""
    action: str = Field(..., min_length=1, max_length=50)
    resource: str = Field(..., min_length=1, max_length=50)
    resource_id: Optional[str] = None
    description: str = Field("", max_length=500)
    details: Optional[Any] = None
