from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TransactionType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    RETURN = "RETURN"
    ADJUSTMENT = "ADJUSTMENT"


class CreateTransactionRequest(BaseModel):
    product_id: str
    type: TransactionType
    quantity: int = Field(..., ge=0)
    reason: str = Field(..., min_length=1)
    supplier_id: Optional[str] = None
    purchase_order_id: Optional[str] = None
    notes: Optional[str] = None
