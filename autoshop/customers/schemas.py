from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class Vehicle(BaseModel):
    reg_no: str = Field(..., min_length=1)
    make: str
    model: str
    year: Optional[int] = Field(None, ge=1900, le=2100)


class CreateCustomerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=10, max_length=15)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    vehicles: list[Vehicle] = []


class UpdateCustomerRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    vehicles: Optional[list[Vehicle]] = None
