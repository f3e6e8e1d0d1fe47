from pydantic import BaseModel, EmailStr
from typing import List, Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class SetAdminRequest(BaseModel):
    user_id: str
    is_admin: bool = True


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    role: str
    permissions: List[str]
    app_metadata: Optional[dict] = None
