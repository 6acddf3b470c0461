# app/modules/notifications/crud.py
import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Notification

logger = logging.getLogger(__name__)


async def create_notification(
    db: AsyncSession,
    *,
    user_id: str,
    type: str,
    title: str,
    message: str,
    metadata: dict[str, Any] | None = None,
    commit: bool = True,
) -> Notification:
    n = Notification(user_id=user_id, type=type, title=title, message=message, metadata_=metadata)
    db.add(n)
    if commit:
        await db.commit()
        await db.refresh(n)
    logger.debug("Notificação %s para %s", type, user_id)
    return n


async def unread_count(db: AsyncSession, user_id: str) -> int:
    res = await db.execute(
        select(func.count(Notification.id)).where(Notification.user_id == user_id, Notification.read.is_(False))
    )
    return int(res.scalar_one() or 0)


async def mark_all_read(db: AsyncSession, user_id: str) -> int:
    res = await db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    await db.commit()
    return res.rowcount or 0
