from typing import Optional

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=100)
    barcode: Optional[str] = None
    category: str = Field(..., min_length=1)
    brand: Optional[str] = None
    description: Optional[str] = None
    cost_price: float = Field(..., ge=0)
    selling_price: float = Field(..., ge=0)
    stock_qty: int = Field(0, ge=0)
    min_stock_level: int = Field(5, ge=0)
    unit: str = "pcs"
    supplier_id: Optional[str] = None


class UpdateProductRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    sku: Optional[str] = None
    barcode: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    description: Optional[str] = None
    cost_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    stock_qty: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    supplier_id: Optional[str] = None
