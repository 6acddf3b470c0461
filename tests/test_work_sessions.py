from datetime import timedelta

from app.modules.work_sessions.crud import format_elapsed, get_active_session, get_work_session_stats
from app.modules.work_sessions.models import WorkSession
from app.utils.clock import utcnow


def test_format_elapsed():
    assert format_elapsed(0) == "00:00:00"
    assert format_elapsed(3725) == "01:02:05"


async def test_support_login_starts_session_and_logout_ends_it(client, db, make_user, login):
    agent = await make_user(email="suporte@agrilink.ao", admin_role="support")
    headers = await login(agent.email)

    r = await client.get("/api/v1/work-sessions/current", headers=headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is True

    # segunda chamada não abre outra sessão
    r2 = await client.post("/api/v1/work-sessions/start", headers=headers)
    assert r2.json()["id"] == r.json()["id"]

    await client.post("/api/v1/auth/logout", headers=headers)
    assert await get_active_session(db, agent.id) is None


async def test_regular_users_cannot_track_time(client, make_user, login):
    user = await make_user()
    r = await client.post("/api/v1/work-sessions/start", headers=await login(user.email))
    assert r.status_code == 403


async def test_beacon_ends_session_with_query_token(client, db, make_user, login):
    agent = await make_user(email="suporte@agrilink.ao", admin_role="support")
    headers = await login(agent.email)
    ws_id = (await client.get("/api/v1/work-sessions/current", headers=headers)).json()["id"]
    token = headers["Authorization"].split(" ", 1)[1]

    r = await client.post(f"/api/v1/work-sessions/{ws_id}/beacon", params={"token": "invalido"})
    assert r.status_code == 401

    r = await client.post(f"/api/v1/work-sessions/{ws_id}/beacon", params={"token": token})
    assert r.status_code == 204
    r = await client.get("/api/v1/work-sessions/current", headers=headers)
    assert r.json() is None


async def test_stats_only_count_ended_sessions(db, make_user):
    agent = await make_user(email="suporte@agrilink.ao", admin_role="support")
    now = utcnow()
    db.add_all([
        WorkSession(user_id=agent.id, started_at=now - timedelta(hours=3), ended_at=now - timedelta(hours=2, minutes=30),
                    is_active=False),
        WorkSession(user_id=agent.id, started_at=now - timedelta(hours=2), ended_at=now - timedelta(minutes=30),
                    is_active=False),
        WorkSession(user_id=agent.id, started_at=now - timedelta(minutes=10), is_active=True),
    ])
    await db.commit()

    stats = await get_work_session_stats(db, agent.id)
    assert stats == {"total_sessions": 2, "total_minutes": 120, "avg_session_minutes": 60}
