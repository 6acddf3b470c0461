from typing import Any, List, Optional
from pydantic import BaseModel, Field


class SubscriptionKeys(BaseModel):
    p256dh: str
    auth: str


class SubscribeIn(BaseModel):
    # mesmo formato de PushSubscription.toJSON() do navegador
    endpoint: str = Field(min_length=1)
    keys: SubscriptionKeys
    user_agent: Optional[str] = None


class SubscribeOut(BaseModel):
    success: bool
    id: str


class PushStatusOut(BaseModel):
    configured: bool
    subscribed: bool
    subscriptions: int


class PushSendIn(BaseModel):
    userId: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    data: Optional[dict[str, Any]] = None
    icon: Optional[str] = None
    sound: Optional[str] = None


class PushResult(BaseModel):
    success: bool
    subscription: str
    error: Optional[str] = None


class PushSendOut(BaseModel):
    success: bool
    message: str
    results: List[PushResult]
