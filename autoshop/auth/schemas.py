from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """POST /auth/login"""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    id: str
    email: str
    name: str
    role: str


class MeResponse(LoginResponse):
    permissions: dict[str, list[str]]
