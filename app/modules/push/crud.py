# app/modules/push/crud.py
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import PushSubscription


async def _find(db: AsyncSession, user_id: str, endpoint: str) -> PushSubscription | None:
    res = await db.execute(
        select(PushSubscription).where(PushSubscription.user_id == user_id, PushSubscription.endpoint == endpoint)
    )
    return res.scalar_one_or_none()


def _refresh_keys(sub: PushSubscription, p256dh: str, auth: str, user_agent: str | None) -> None:
    # o navegador pode rotacionar as chaves do mesmo endpoint
    sub.p256dh_key = p256dh
    sub.auth_key = auth
    if user_agent:
        sub.user_agent = user_agent


async def upsert_subscription(db: AsyncSession, *, user_id: str, endpoint: str, p256dh: str,
                              auth: str, user_agent: str | None = None) -> PushSubscription:
    sub = await _find(db, user_id, endpoint)
    if sub:
        _refresh_keys(sub, p256dh, auth, user_agent)
        await db.commit()
    else:
        sub = PushSubscription(user_id=user_id, endpoint=endpoint, p256dh_key=p256dh,
                               auth_key=auth, user_agent=user_agent)
        db.add(sub)
        try:
            await db.commit()
        except IntegrityError:
            # outra requisição gravou o mesmo (user, endpoint) entre o SELECT e o INSERT
            await db.rollback()
            sub = await _find(db, user_id, endpoint)
            if sub is None:
                raise
            _refresh_keys(sub, p256dh, auth, user_agent)
            await db.commit()
    await db.refresh(sub)
    return sub


async def list_user_subscriptions(db: AsyncSession, user_id: str) -> list[PushSubscription]:
    res = await db.execute(
        select(PushSubscription).where(PushSubscription.user_id == user_id).order_by(PushSubscription.created_at)
    )
    return list(res.scalars().all())


async def delete_user_subscriptions(db: AsyncSession, user_id: str, endpoint: str | None = None) -> int:
    stmt = delete(PushSubscription).where(PushSubscription.user_id == user_id)
    if endpoint:
        stmt = stmt.where(PushSubscription.endpoint == endpoint)
    res = await db.execute(stmt)
    await db.commit()
    return res.rowcount or 0


async def delete_subscriptions_by_id(db: AsyncSession, ids: list[str]) -> int:
    if not ids:
        return 0
    res = await db.execute(delete(PushSubscription).where(PushSubscription.id.in_(ids)))
    await db.commit()
    return res.rowcount or 0
