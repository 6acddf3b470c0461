from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class SupportNotifyIn(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    message: str = Field(min_length=1)


class SupportNotifyOut(BaseModel):
    success: bool
    message: str
    whatsapp_notified: bool


class SupportMessageOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class SupportMessageUpdate(BaseModel):
    status: Literal["pendente", "em_andamento", "resolvido"]
