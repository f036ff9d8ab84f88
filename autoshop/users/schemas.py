from pydantic import BaseModel, Field, EmailStr
from typing import Optional

from autoshop.rbac import Role


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role


class UpdateUserRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    role: Optional[Role] = None
    is_active: Optional[bool] = None
