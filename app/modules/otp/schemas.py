from typing import Optional
from pydantic import BaseModel, EmailStr, model_validator


class OtpSendIn(BaseModel):
    user_id: str
    email: EmailStr
    full_name: str


class OtpSendOut(BaseModel):
    success: bool
    message: str
    resend_after: int
    warning: Optional[str] = None


class OtpVerifyIn(BaseModel):
    code: str
    user_id: Optional[str] = None
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def _user_or_email(self):
        if not self.user_id and not self.email:
            raise ValueError("informe user_id ou email")
        return self


class OtpVerifyOut(BaseModel):
    verified: bool
