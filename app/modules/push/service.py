# app/modules/push/service.py
import asyncio
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.integrations import webpush_sender
from app.integrations.webpush_sender import PushDeliveryError
from .crud import delete_subscriptions_by_id, list_user_subscriptions
from .models import PushSubscription
from .payload import build_payload, encode_payload

logger = logging.getLogger(__name__)


class PushConfigError(RuntimeError):
    pass


class NoSubscriptionsError(LookupError):
    pass


def vapid_configured() -> bool:
    return bool(settings.VAPID_PUBLIC_KEY and settings.VAPID_PRIVATE_KEY)


async def _deliver(sub: PushSubscription, payload: str) -> dict[str, Any]:
    try:
        await webpush_sender.send_web_push(
            endpoint=sub.endpoint,
            p256dh=sub.p256dh_key,
            auth=sub.auth_key,
            payload=payload,
            vapid_private_key=settings.VAPID_PRIVATE_KEY,
            vapid_subject=settings.VAPID_SUBJECT,
        )
        return {"success": True, "subscription": sub.id}
    except PushDeliveryError as e:
        logger.warning("Falha no push para a inscrição %s (status=%s): %s", sub.id, e.status_code, e)
        return {"success": False, "subscription": sub.id, "error": str(e) or "Unknown error", "gone": e.is_gone}


async def send_to_user(db: AsyncSession, user_id: str, *, title: str | None = None, body: str | None = None,
                       data: dict | None = None, icon: str | None = None, sound: str | None = None) -> dict[str, Any]:
    """
    Envia para todos os dispositivos do usuário em paralelo.
    Uma falha não interrompe as demais; endpoints 404/410 são apagados no fim.
    """
    if not vapid_configured():
        raise PushConfigError("VAPID keys not configured")

    subs = await list_user_subscriptions(db, user_id)
    if not subs:
        raise NoSubscriptionsError("No push subscriptions found for user")

    payload = encode_payload(build_payload(title, body, data, icon, sound))
    outcomes = await asyncio.gather(*(_deliver(s, payload) for s in subs), return_exceptions=True)

    results: list[dict[str, Any]] = []
    gone: list[str] = []
    for sub, out in zip(subs, outcomes):
        if isinstance(out, BaseException):
            logger.exception("Erro inesperado no push para %s", sub.id, exc_info=out)
            results.append({"success": False, "subscription": sub.id, "error": str(out) or "Unknown error"})
            continue
        if out.pop("gone", False):
            gone.append(sub.id)
        results.append(out)

    removed = await delete_subscriptions_by_id(db, gone)
    if removed:
        logger.info("%d inscrição(ões) expirada(s) removida(s) do usuário %s", removed, user_id)

    ok = sum(1 for r in results if r["success"])
    failed = len(results) - ok
    return {"success": True, "message": f"Sent to {ok} device(s), {failed} failed", "results": results}
