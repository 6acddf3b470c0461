# app/modules/work_sessions/router.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user, resolve_session
from app.modules.users.models import User
from .crud import (
    elapsed_seconds, end_session, format_elapsed, get_active_session,
    get_work_session_stats, start_session,
)
from .models import WorkSession
from .schemas import WorkSessionOut, WorkSessionStatsOut

router = APIRouter()


def _out(ws: WorkSession) -> WorkSessionOut:
    secs = elapsed_seconds(ws)
    return WorkSessionOut(
        id=ws.id,
        started_at=ws.started_at,
        ended_at=ws.ended_at,
        is_active=ws.is_active,
        elapsed_seconds=secs,
        elapsed_formatted=format_elapsed(secs),
    )


async def get_support_agent(user: User = Depends(get_current_user)) -> User:
    if not user.is_support_agent:
        raise HTTPException(status_code=403, detail="Apenas agentes de suporte")
    return user


@router.post("/start", response_model=WorkSessionOut)
async def start(db: AsyncSession = Depends(get_db), me: User = Depends(get_support_agent)):
    return _out(await start_session(db, me.id))


@router.post("/end", response_model=WorkSessionOut)
async def end(db: AsyncSession = Depends(get_db), me: User = Depends(get_support_agent)):
    ws = await get_active_session(db, me.id)
    if not ws:
        raise HTTPException(status_code=404, detail="Nenhuma sessão ativa")
    return _out(await end_session(db, ws))


@router.get("/current", response_model=WorkSessionOut | None)
async def current(db: AsyncSession = Depends(get_db), me: User = Depends(get_support_agent)):
    ws = await get_active_session(db, me.id)
    return _out(ws) if ws else None


@router.get("/stats", response_model=WorkSessionStatsOut)
async def stats(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    return await get_work_session_stats(db, me.id)


# sendBeacon não envia cabeçalhos; o token vem na query string
@router.post("/{session_id}/beacon", status_code=status.HTTP_204_NO_CONTENT)
async def end_by_beacon(
    session_id: str,
    token: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    sess = await resolve_session(db, token)
    if not sess:
        raise HTTPException(status_code=401, detail="Sessão inválida ou expirada")
    res = await db.execute(
        select(WorkSession).where(WorkSession.id == session_id, WorkSession.user_id == sess.user_id)
    )
    ws = res.scalar_one_or_none()
    if not ws:
        raise HTTPException(status_code=404, detail="Sessão de trabalho não encontrada")
    await end_session(db, ws)
    return Response(status_code=204)
