from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PaymentStatus(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    DUE = "due"


class OrderItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class CreateOrderRequest(BaseModel):
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    items: list[OrderItem] = Field(..., min_length=1)
    total: float = Field(..., ge=0)
    payment_status: PaymentStatus = PaymentStatus.DUE
    paid_amount: float = Field(0, ge=0)
    salesperson_id: Optional[str] = None


class UpdateOrderRequest(BaseModel):
    payment_status: Optional[PaymentStatus] = None
    paid_amount: Optional[float] = Field(None, ge=0)
    delivery_status: Optional[str] = None
    salesperson_id: Optional[str] = None
