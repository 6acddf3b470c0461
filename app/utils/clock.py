# app/utils/clock.py
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from app.core.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    # SQLite devolve datetimes "naive"; tratamos como UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_today(tz_name: str | None = None) -> date:
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE)).date()
