# app/modules/work_sessions/crud.py
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.clock import as_utc, utcnow
from .models import WorkSession

logger = logging.getLogger(__name__)


def format_elapsed(seconds: int) -> str:
    seconds = max(0, int(seconds))
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def elapsed_seconds(ws: WorkSession, now: datetime | None = None) -> int:
    end = as_utc(ws.ended_at) if ws.ended_at else (now or utcnow())
    return max(0, int((end - as_utc(ws.started_at)).total_seconds()))


async def get_active_session(db: AsyncSession, user_id: str) -> WorkSession | None:
    res = await db.execute(
        select(WorkSession)
        .where(WorkSession.user_id == user_id, WorkSession.is_active.is_(True))
        .order_by(WorkSession.started_at.desc())
    )
    return res.scalars().first()


async def start_session(db: AsyncSession, user_id: str) -> WorkSession:
    # no máximo uma sessão ativa por agente
    active = await get_active_session(db, user_id)
    if active:
        return active
    ws = WorkSession(user_id=user_id, started_at=utcnow(), is_active=True)
    db.add(ws)
    await db.commit()
    await db.refresh(ws)
    logger.info("Sessão de trabalho %s iniciada (usuário %s)", ws.id, user_id)
    return ws


async def end_session(db: AsyncSession, ws: WorkSession) -> WorkSession:
    if ws.is_active:
        ws.ended_at = utcnow()
        ws.is_active = False
        await db.commit()
        await db.refresh(ws)
        logger.info("Sessão de trabalho %s encerrada", ws.id)
    return ws


async def get_work_session_stats(db: AsyncSession, user_id: str) -> dict:
    """Estatísticas das sessões encerradas: total, minutos e média por sessão."""
    res = await db.execute(
        select(WorkSession).where(WorkSession.user_id == user_id, WorkSession.ended_at.is_not(None))
    )
    sessions = res.scalars().all()
    total_seconds = sum(elapsed_seconds(ws) for ws in sessions)
    total_minutes = total_seconds // 60
    return {
        "total_sessions": len(sessions),
        "total_minutes": total_minutes,
        "avg_session_minutes": round(total_minutes / len(sessions)) if sessions else 0,
    }
