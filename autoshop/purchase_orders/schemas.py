from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PurchaseOrderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class PurchaseOrderItem(BaseModel):
    product_id: Optional[str] = None
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)
    total: float = Field(..., ge=0)


class CreatePurchaseOrderRequest(BaseModel):
    supplier_id: str
    items: list[PurchaseOrderItem] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    expected_delivery_date: Optional[datetime] = None
    notes: Optional[str] = None


class UpdatePurchaseOrderRequest(BaseModel):
    status: Optional[PurchaseOrderStatus] = None
    expected_delivery_date: Optional[datetime] = None
    notes: Optional[str] = None
