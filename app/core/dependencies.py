from typing import AsyncIterator, Optional
from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.db.session import AsyncSessionLocal
from app.modules.auth.models import AuthSession
from app.modules.auth.session_store import SessionStore
from app.modules.users.models import User
from app.core.config import settings
from app.core.security import decode_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session

async def resolve_session(db: AsyncSession, token: str) -> AuthSession | None:
    try:
        payload = decode_token(token, settings.SECRET_KEY)
    except JWTError:
        return None
    sid = payload.get("sid")
    if not sid or not payload.get("sub"):
        return None
    sess = await SessionStore(db).get_active(sid)
    if not sess or sess.user_id != payload.get("sub"):
        return None
    return sess

async def get_current_session(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> AuthSession:
    if not token:
        raise HTTPException(status_code=401, detail="Missing token")
    sess = await resolve_session(db, token)
    if not sess:
        raise HTTPException(status_code=401, detail="Sessão inválida ou expirada")
    return sess

async def get_current_user(
    sess: AuthSession = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
) -> User:
    q = await db.execute(select(User).where(User.id == sess.user_id))
    user = q.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user

async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    # rotas públicas que registram o usuário quando há login (ex.: suporte)
    if not token:
        return None
    sess = await resolve_session(db, token)
    if not sess:
        return None
    q = await db.execute(select(User).where(User.id == sess.user_id))
    return q.scalar_one_or_none()

async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin only")
    return user

def require_user_type(*user_types: str):
    async def _dep(user: User = Depends(get_current_user)) -> User:
        if user.user_type not in user_types and not user.is_admin:
            raise HTTPException(status_code=403, detail="Sem permissão para este perfil")
        return user
    return _dep
