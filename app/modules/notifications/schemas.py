from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class NotificationOut(BaseModel):
    id: str
    type: str
    title: str
    message: str
    metadata: Optional[dict[str, Any]] = Field(default=None, validation_alias="metadata_")
    read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCountOut(BaseModel):
    count: int
