from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class CreateSupplierRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    contact: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    products_supplied: list[str] = []
    payment_terms: Optional[str] = None
    is_active: bool = True


class UpdateSupplierRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    contact: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    products_supplied: Optional[list[str]] = None
    payment_terms: Optional[str] = None
    is_active: Optional[bool] = None
