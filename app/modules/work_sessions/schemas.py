from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class WorkSessionOut(BaseModel):
    id: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    is_active: bool
    elapsed_seconds: int
    elapsed_formatted: str  # HH:MM:SS


class WorkSessionStatsOut(BaseModel):
    total_sessions: int
    total_minutes: int
    avg_session_minutes: int
