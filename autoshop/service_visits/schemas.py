from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class VisitStatus(str, Enum):
    INQUIRED = "inquired"
    WORKING = "working"
    WAITING = "waiting"
    COMPLETED = "completed"


class PartUsed(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class CreateServiceVisitRequest(BaseModel):
    customer_id: str
    vehicle_reg: str = Field(..., min_length=1)
    handler_ids: list[str] = []
    status: VisitStatus = VisitStatus.INQUIRED
    parts_used: list[PartUsed] = []
    total_amount: float = Field(0, ge=0)
    notes: Optional[str] = None
    before_images: list[str] = []
    after_images: list[str] = []


class UpdateServiceVisitRequest(BaseModel):
    vehicle_reg: Optional[str] = Field(None, min_length=1)
    handler_ids: Optional[list[str]] = None
    status: Optional[VisitStatus] = None
    parts_used: Optional[list[PartUsed]] = None
    total_amount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    before_images: Optional[list[str]] = None
    after_images: Optional[list[str]] = None
