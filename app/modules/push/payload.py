# app/modules/push/payload.py
"""
Formato da notificação entregue ao service worker.

O sender monta um JSON com todos os campos; o worker mescla o JSON recebido sobre os
padrões e, se o corpo não for JSON, usa o texto puro como `body`.
"""
import json
from typing import Any

DEFAULTS: dict[str, Any] = {
    "title": "Notificação AgriLink",
    "body": "Você tem uma nova notificação",
    "icon": "/agrilink-icon.png",
    "badge": "/agrilink-badge.png",
    "sound": "/sounds/notification.mp3",
    "data": {},
    "vibrate": [200, 100, 200],
    "tag": "agrilink-notification",
    "requireInteraction": True,
}


def build_payload(title: str | None = None, body: str | None = None, data: dict | None = None,
                  icon: str | None = None, sound: str | None = None) -> dict[str, Any]:
    # campos vazios caem no padrão
    return {
        **DEFAULTS,
        "title": title or DEFAULTS["title"],
        "body": body or DEFAULTS["body"],
        "icon": icon or DEFAULTS["icon"],
        "sound": sound or DEFAULTS["sound"],
        "data": data or {},
        "vibrate": list(DEFAULTS["vibrate"]),
    }


def encode_payload(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


def parse_payload(raw: str | bytes | None) -> dict[str, Any]:
    out = {**DEFAULTS, "data": {}, "vibrate": list(DEFAULTS["vibrate"])}
    if raw is None:
        return out
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        data = json.loads(raw)
    except ValueError:
        out["body"] = raw
        return out
    if not isinstance(data, dict):
        out["body"] = raw
        return out
    out.update(data)
    return out
