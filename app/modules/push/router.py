# app/modules/push/router.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, get_current_user
from app.modules.users.models import User
from .crud import delete_user_subscriptions, list_user_subscriptions, upsert_subscription
from .schemas import PushSendIn, PushSendOut, PushStatusOut, SubscribeIn, SubscribeOut
from .service import NoSubscriptionsError, PushConfigError, send_to_user, vapid_configured

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/vapid-public-key")
async def vapid_public_key():
    if not settings.VAPID_PUBLIC_KEY:
        return JSONResponse(status_code=500, content={"error": "VAPID keys not configured"})
    return {"publicKey": settings.VAPID_PUBLIC_KEY}


@router.get("/status", response_model=PushStatusOut)
async def push_status(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    subs = await list_user_subscriptions(db, me.id)
    return PushStatusOut(configured=vapid_configured(), subscribed=bool(subs), subscriptions=len(subs))


@router.post("/subscribe", response_model=SubscribeOut)
async def subscribe(payload: SubscribeIn, db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    sub = await upsert_subscription(
        db,
        user_id=me.id,
        endpoint=payload.endpoint,
        p256dh=payload.keys.p256dh,
        auth=payload.keys.auth,
        user_agent=payload.user_agent,
    )
    return SubscribeOut(success=True, id=sub.id)


@router.delete("/subscribe")
async def unsubscribe(
    endpoint: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    # sem endpoint: remove todas as inscrições do usuário
    removed = await delete_user_subscriptions(db, me.id, endpoint)
    return {"success": True, "removed": removed}


async def _send(db: AsyncSession, user_id: str, payload: PushSendIn):
    try:
        out = await send_to_user(
            db, user_id,
            title=payload.title, body=payload.body, data=payload.data,
            icon=payload.icon, sound=payload.sound,
        )
    except PushConfigError as e:
        logger.error("Push indisponível: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})
    except NoSubscriptionsError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    return PushSendOut(**out)


@router.post("/send", response_model=PushSendOut)
async def send_push(payload: PushSendIn, db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    if not vapid_configured():
        return JSONResponse(status_code=500, content={"error": "VAPID keys not configured"})
    if not payload.userId:
        return JSONResponse(status_code=400, content={"error": "userId is required"})
    if payload.userId != me.id and not me.is_admin:
        return JSONResponse(status_code=403, content={"error": "Forbidden"})
    return await _send(db, payload.userId, payload)


@router.post("/test", response_model=PushSendOut)
async def send_test(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    payload = PushSendIn(
        title="Teste de notificação",
        body="As notificações push estão funcionando!",
        data={"type": "test"},
    )
    return await _send(db, me.id, payload)
