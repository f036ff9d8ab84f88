from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Channel(str, Enum):
    CALL = "call"
    SMS = "sms"
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    VISIT = "visit"


class CreateCommunicationRequest(BaseModel):
    customer_id: str
    channel: Channel
    subject: Optional[str] = None
    message: str = Field(..., min_length=1)
    handled_by: Optional[str] = None
    date: Optional[datetime] = None
