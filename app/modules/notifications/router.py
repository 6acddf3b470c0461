# app/modules/notifications/router.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.modules.users.models import User
from .crud import mark_all_read, unread_count
from .models import Notification
from .schemas import NotificationOut, UnreadCountOut

router = APIRouter()


@router.get("", response_model=list[NotificationOut])
async def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, le=200),
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    stmt = select(Notification).where(Notification.user_id == me.id)
    if unread_only:
        stmt = stmt.where(Notification.read.is_(False))
    stmt = stmt.order_by(Notification.created_at.desc()).limit(limit)
    res = await db.execute(stmt)
    return res.scalars().all()


@router.get("/unread-count", response_model=UnreadCountOut)
async def get_unread_count(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    return UnreadCountOut(count=await unread_count(db, me.id))


@router.post("/read-all")
async def read_all(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    n = await mark_all_read(db, me.id)
    return {"updated": n}


@router.post("/{notification_id}/read", response_model=NotificationOut)
async def read_one(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    res = await db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_id == me.id)
    )
    n = res.scalar_one_or_none()
    if not n:
        raise HTTPException(status_code=404, detail="Notificação não encontrada")
    n.read = True
    await db.commit()
    await db.refresh(n)
    return n
