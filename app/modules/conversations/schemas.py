from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ConversationOut(BaseModel):
    id: str
    user_id: str
    participant_id: Optional[str] = None
    title: str
    avatar: Optional[str] = None
    last_message: Optional[str] = None
    last_timestamp: Optional[datetime] = None
    unread_count: int = 0

    class Config:
        from_attributes = True


class ConversationStart(BaseModel):
    participant_id: str


class MessageIn(BaseModel):
    content: str = Field(min_length=1, max_length=4000)


class MessageOut(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
