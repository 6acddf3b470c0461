from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.modules.users.schemas import UserOut, UserType


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    identity_document: str = Field(min_length=1)
    user_type: UserType
    province_id: str
    municipality_id: str
    phone: Optional[str] = None
    referred_by_agent_id: Optional[str] = None  # código do agente (ex.: AG7K2Q9X)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
    is_admin: bool = False
    is_root_admin: bool = False
    is_super_root: bool = False
    is_support_agent: bool = False


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str = Field(min_length=6)
