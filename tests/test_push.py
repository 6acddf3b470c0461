import asyncio
import json

from sqlalchemy import func, select

from app.core.config import settings
from app.integrations import webpush_sender
from app.integrations.webpush_sender import PushDeliveryError
from app.modules.push.models import PushSubscription
from app.modules.push.payload import build_payload, encode_payload, parse_payload


def _sub(endpoint):
    return {"endpoint": endpoint, "keys": {"p256dh": "BP256dh-key", "auth": "auth-secret"}}


def test_payload_defaults():
    p = build_payload()
    assert p["title"] == "Notificação AgriLink"
    assert p["icon"] == "/agrilink-icon.png"
    assert p["badge"] == "/agrilink-badge.png"
    assert p["sound"] == "/sounds/notification.mp3"
    assert p["vibrate"] == [200, 100, 200]
    assert p["tag"] == "agrilink-notification"
    assert p["requireInteraction"] is True
    assert p["data"] == {}


def test_parse_merges_json_over_defaults():
    raw = encode_payload(build_payload(title="Novo pedido", data={"order_id": "o1"}))
    p = parse_payload(raw)
    assert p["title"] == "Novo pedido"
    assert p["data"] == {"order_id": "o1"}

    p = parse_payload(json.dumps({"body": "só o corpo"}))
    assert p["title"] == "Notificação AgriLink"
    assert p["body"] == "só o corpo"


def test_parse_falls_back_to_plain_text():
    p = parse_payload(b"Mensagem simples")
    assert p["body"] == "Mensagem simples"
    assert p["title"] == "Notificação AgriLink"


async def _count(db):
    return (await db.execute(select(func.count(PushSubscription.id)))).scalar_one()


async def test_subscribe_is_idempotent(client, db, make_user, login):
    user = await make_user()
    headers = await login(user.email)

    for _ in range(2):
        r = await client.post("/api/v1/push/subscribe", json=_sub("https://push.example/a"), headers=headers)
        assert r.status_code == 200
    assert await _count(db) == 1

    r = await client.get("/api/v1/push/status", headers=headers)
    assert r.json()["subscribed"] is True

    r = await client.delete("/api/v1/push/subscribe", params={"endpoint": "https://push.example/a"}, headers=headers)
    assert r.json()["removed"] == 1
    assert await _count(db) == 0


async def test_concurrent_subscribe_keeps_one_row(client, db, make_user, login):
    user = await make_user()
    headers = await login(user.email)
    body = _sub("https://push.example/dup")

    r1, r2 = await asyncio.gather(
        client.post("/api/v1/push/subscribe", json=body, headers=headers),
        client.post("/api/v1/push/subscribe", json=body, headers=headers),
    )
    assert (r1.status_code, r2.status_code) == (200, 200)
    assert r1.json()["id"] == r2.json()["id"]
    assert await _count(db) == 1


async def test_upsert_recovers_when_insert_loses_the_race(db, session_factory, make_user, monkeypatch):
    from app.modules.push import crud

    user = await make_user()
    real_find = crud._find
    calls = []

    async def racing_find(session, user_id, endpoint):
        calls.append(endpoint)
        if len(calls) == 1:
            # outra requisição grava o mesmo endpoint antes do INSERT
            async with session_factory() as other:
                other.add(PushSubscription(user_id=user_id, endpoint=endpoint, p256dh_key="antiga", auth_key="antiga"))
                await other.commit()
            return None
        return await real_find(session, user_id, endpoint)

    monkeypatch.setattr(crud, "_find", racing_find)
    async with session_factory() as s:
        sub = await crud.upsert_subscription(s, user_id=user.id, endpoint="https://push.example/r",
                                             p256dh="nova", auth="nova")
    assert sub.p256dh_key == "nova"
    assert len(calls) == 2
    assert await _count(db) == 1


async def test_send_fans_out_and_drops_gone_endpoints(client, db, make_user, login, monkeypatch):
    monkeypatch.setattr(settings, "VAPID_PUBLIC_KEY", "public")
    monkeypatch.setattr(settings, "VAPID_PRIVATE_KEY", "private")
    user = await make_user()
    headers = await login(user.email)
    for ep in ("https://push.example/ok", "https://push.example/gone", "https://push.example/fail"):
        await client.post("/api/v1/push/subscribe", json=_sub(ep), headers=headers)

    calls = []

    async def fake_push(*, endpoint, p256dh, auth, payload, vapid_private_key, vapid_subject):
        calls.append(endpoint)
        assert json.loads(payload)["title"] == "Olá"
        if endpoint.endswith("/gone"):
            raise PushDeliveryError("Push failed: 410 Gone", 410)
        if endpoint.endswith("/fail"):
            raise PushDeliveryError("Push failed: 500", 500)

    monkeypatch.setattr(webpush_sender, "send_web_push", fake_push)

    r = await client.post("/api/v1/push/send", json={"userId": user.id, "title": "Olá"}, headers=headers)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["message"] == "Sent to 1 device(s), 2 failed"
    assert len(data["results"]) == 3
    assert len(calls) == 3

    rows = (await db.execute(select(PushSubscription.endpoint))).scalars().all()
    assert sorted(rows) == ["https://push.example/fail", "https://push.example/ok"]


async def test_send_errors(client, make_user, login, monkeypatch):
    user = await make_user()
    headers = await login(user.email)

    monkeypatch.setattr(settings, "VAPID_PRIVATE_KEY", None)
    r = await client.post("/api/v1/push/send", json={"userId": user.id}, headers=headers)
    assert r.status_code == 500
    assert r.json() == {"error": "VAPID keys not configured"}

    monkeypatch.setattr(settings, "VAPID_PUBLIC_KEY", "public")
    monkeypatch.setattr(settings, "VAPID_PRIVATE_KEY", "private")
    r = await client.post("/api/v1/push/send", json={}, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "userId is required"}

    r = await client.post("/api/v1/push/send", json={"userId": user.id}, headers=headers)
    assert r.status_code == 404
    assert r.json() == {"error": "No push subscriptions found for user"}


async def test_non_admin_cannot_push_to_others(client, make_user, login, monkeypatch):
    monkeypatch.setattr(settings, "VAPID_PUBLIC_KEY", "public")
    monkeypatch.setattr(settings, "VAPID_PRIVATE_KEY", "private")
    user = await make_user()
    other = await make_user(email="outro@agrilink.ao")
    headers = await login(user.email)
    r = await client.post("/api/v1/push/send", json={"userId": other.id}, headers=headers)
    assert r.status_code == 403
