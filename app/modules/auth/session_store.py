# app/modules/auth/session_store.py
"""
Armazenamento de sessões de login.

Fonte única de verdade sobre quem está logado: o token só carrega o id da sessão
(`sid`), e uma sessão revogada invalida o token imediatamente (logout, reset de senha).
"""
import logging
from datetime import datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.clock import as_utc, utcnow
from .models import AuthSession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: str, ttl_minutes: int) -> AuthSession:
        sess = AuthSession(user_id=user_id, expires_at=utcnow() + timedelta(minutes=ttl_minutes))
        self.db.add(sess)
        await self.db.commit()
        await self.db.refresh(sess)
        logger.info("Sessão %s criada para usuário %s", sess.id, user_id)
        return sess

    async def get_active(self, session_id: str, now: datetime | None = None) -> AuthSession | None:
        now = now or utcnow()
        res = await self.db.execute(select(AuthSession).where(AuthSession.id == session_id))
        sess = res.scalar_one_or_none()
        if not sess or sess.revoked_at is not None:
            return None
        if as_utc(sess.expires_at) <= now:
            return None
        return sess

    async def revoke(self, session_id: str) -> bool:
        res = await self.db.execute(
            update(AuthSession)
            .where(AuthSession.id == session_id, AuthSession.revoked_at.is_(None))
            .values(revoked_at=utcnow())
        )
        await self.db.commit()
        return (res.rowcount or 0) > 0

    async def revoke_all_for_user(self, user_id: str) -> int:
        res = await self.db.execute(
            update(AuthSession)
            .where(AuthSession.user_id == user_id, AuthSession.revoked_at.is_(None))
            .values(revoked_at=utcnow())
        )
        await self.db.commit()
        logger.info("%s sessão(ões) revogada(s) para usuário %s", res.rowcount or 0, user_id)
        return res.rowcount or 0
