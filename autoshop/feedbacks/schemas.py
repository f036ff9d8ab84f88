from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FeedbackType(str, Enum):
    FEEDBACK = "feedback"
    COMPLAINT = "complaint"
    SUGGESTION = "suggestion"


class FeedbackStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class CreateFeedbackRequest(BaseModel):
    customer_id: str
    type: FeedbackType = FeedbackType.FEEDBACK
    rating: Optional[int] = Field(None, ge=1, le=5)
    message: str = Field(..., min_length=1)
    status: FeedbackStatus = FeedbackStatus.OPEN


class UpdateFeedbackRequest(BaseModel):
    status: Optional[FeedbackStatus] = None
    assigned_to: Optional[str] = None
    resolution: Optional[str] = None
