from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr

UserType = Literal["agricultor", "comprador", "agente"]


class UserOut(BaseModel):
    id: str
    email: EmailStr
    full_name: str
    phone: Optional[str] = None
    identity_document: str
    user_type: UserType
    province_id: str
    municipality_id: str
    avatar_url: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    agent_code: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserPublicOut(BaseModel):
    id: str
    full_name: str
    user_type: UserType
    province_id: str
    municipality_id: str
    avatar_url: Optional[str] = None
    agent_code: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    identity_document: Optional[str] = None
    province_id: Optional[str] = None
    municipality_id: Optional[str] = None
    avatar_url: Optional[str] = None
