from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from autoshop.rbac import Role


class CreateEmployeeRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: Role
    contact: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    joining_date: Optional[datetime] = None
    is_active: bool = True


class UpdateEmployeeRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[Role] = None
    contact: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    joining_date: Optional[datetime] = None
    is_active: Optional[bool] = None
