# app/integrations/webpush_sender.py
from __future__ import annotations
import asyncio
import logging
from typing import Any

from pywebpush import WebPushException, webpush

logger = logging.getLogger(__name__)

# o serviço de push responde 404/410 quando o endpoint deixou de existir
GONE_STATUSES = {404, 410}


class PushDeliveryError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_gone(self) -> bool:
        return self.status_code in GONE_STATUSES


def _send_sync(subscription_info: dict[str, Any], payload: str,
               vapid_private_key: str, vapid_subject: str) -> None:
    try:
        webpush(
            subscription_info=subscription_info,
            data=payload,
            vapid_private_key=vapid_private_key,
            vapid_claims={"sub": vapid_subject},
        )
    except WebPushException as e:
        status_code = getattr(e.response, "status_code", None)
        raise PushDeliveryError(str(e), status_code) from e


async def send_web_push(*, endpoint: str, p256dh: str, auth: str, payload: str,
                        vapid_private_key: str, vapid_subject: str) -> None:
    """Entrega um push para um endpoint. Levanta PushDeliveryError em falha."""
    subscription_info = {"endpoint": endpoint, "keys": {"p256dh": p256dh, "auth": auth}}
    # pywebpush é síncrono (requests); roda fora do event loop
    await asyncio.to_thread(_send_sync, subscription_info, payload, vapid_private_key, vapid_subject)
