from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Literal, Optional

AdminRole = Literal["admin", "root", "super_root", "support"]


class UserAdminOut(BaseModel):
    id: str
    full_name: str
    email: EmailStr
    user_type: str
    admin_role: Optional[str] = None
    is_admin: bool
    is_root_admin: bool
    is_super_root: bool
    is_support_agent: bool
    email_verified: bool
    created_at: datetime

    class Config:
        from_attributes = True


class RoleUpdate(BaseModel):
    # None remove o papel administrativo
    admin_role: Optional[AdminRole] = None
