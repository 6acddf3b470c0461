import logging
import secrets
import string

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.config import settings
from app.core.dependencies import get_db, get_current_session, get_current_user
from app.core.security import (
    verify_password, hash_password, create_access_token,
    create_purpose_token, decode_purpose_payload, password_fingerprint,
)
from app.integrations import mailer
from app.modules.auth.models import AuthSession
from app.modules.otp.crud import OtpGenerationError, issue_and_send, sync_user_email_verified
from app.modules.users.models import User
from app.modules.users.schemas import UserOut
from app.modules.work_sessions.crud import end_session, get_active_session, start_session
from app.utils.text import normalize_email, normalize_phone
from .schemas import (
    RegisterRequest, LoginRequest, TokenOut,
    PasswordResetRequest, PasswordResetConfirm,
)
from .session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()

RESET_PURPOSE = "password_reset"


def _new_agent_code() -> str:
    alphabet = string.ascii_uppercase + string.digits
    return "AG" + "".join(secrets.choice(alphabet) for _ in range(6))


async def get_agent_id_by_code(db: AsyncSession, code: str | None) -> str | None:
    code = (code or "").strip().upper()
    if not code:
        return None
    res = await db.execute(select(User.id).where(User.agent_code == code))
    return res.scalar_one_or_none()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    email = normalize_email(payload.email)

    exists = await db.execute(select(User.id).where(User.email == email))
    if exists.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="E-mail já cadastrado")

    # código de agente desconhecido não bloqueia o cadastro
    referred_by = await get_agent_id_by_code(db, payload.referred_by_agent_id)

    u = User(
        email=email,
        senha_hash=hash_password(payload.password),
        full_name=payload.full_name.strip(),
        identity_document=payload.identity_document.strip(),
        phone=normalize_phone(payload.phone),
        user_type=payload.user_type,
        province_id=payload.province_id,
        municipality_id=payload.municipality_id,
        referred_by_agent_id=referred_by,
        email_verified=False,
    )
    if payload.user_type == "agente":
        code = _new_agent_code()
        while await get_agent_id_by_code(db, code):
            code = _new_agent_code()
        u.agent_code = code

    db.add(u)
    await db.commit()
    await db.refresh(u)
    logger.info("Novo usuário %s (%s)", u.id, u.user_type)
    return u


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    q = await db.execute(select(User).where(User.email == normalize_email(payload.email)))
    user = q.scalar_one_or_none()
    if not user or not verify_password(payload.password, user.senha_hash):
        raise HTTPException(status_code=401, detail="Email ou senha incorretos")

    await sync_user_email_verified(db, user)
    if settings.REQUIRE_EMAIL_VERIFIED and not user.email_verified:
        raise HTTPException(
            status_code=403,
            detail="Email não confirmado. Por favor, verifique sua caixa de entrada.",
        )

    sess = await SessionStore(db).create(user.id, settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        {"sub": user.id, "sid": sess.id, "user_type": user.user_type},
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        secret_key=settings.SECRET_KEY,
    )

    # agentes de suporte começam a contar horas no login
    if user.is_support_agent:
        await start_session(db, user.id)

    return TokenOut(
        access_token=token,
        user=UserOut.model_validate(user),
        is_admin=user.is_admin,
        is_root_admin=user.is_root_admin,
        is_super_root=user.is_super_root,
        is_support_agent=user.is_support_agent,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    sess: AuthSession = Depends(get_current_session),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await SessionStore(db).revoke(sess.id)
    ws = await get_active_session(db, user.id)
    if ws:
        await end_session(db, ws)
    return Response(status_code=204)


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return user


@router.post("/resend-verification")
async def resend_verification(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if user.email_verified:
        return {"success": True, "message": "E-mail já verificado"}
    try:
        return await issue_and_send(db, user_id=user.id, email=user.email, full_name=user.full_name)
    except OtpGenerationError as e:
        logger.error("Erro ao gerar OTP: %s", e)
        raise HTTPException(status_code=500, detail="Erro ao gerar código OTP")


@router.post("/password-reset")
async def request_password_reset(payload: PasswordResetRequest, db: AsyncSession = Depends(get_db)):
    # resposta igual exista ou não o e-mail
    out = {"success": True, "message": "Se o e-mail existir, enviaremos um link de redefinição."}
    q = await db.execute(select(User).where(User.email == normalize_email(payload.email)))
    user = q.scalar_one_or_none()
    if not user:
        return out

    # o link morre quando a senha muda: vale uma vez só
    token = create_purpose_token(
        user.id, RESET_PURPOSE, settings.PASSWORD_RESET_EXPIRE_MINUTES, settings.SECRET_KEY,
        extra={"pwd": password_fingerprint(user.senha_hash)},
    )
    link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
    try:
        await mailer.send_email(
            to=user.email,
            subject="Redefinição de senha - AgriLink",
            html=mailer.password_reset_email_html(user.full_name, link),
            text=f"Redefina sua senha: {link}",
        )
    except mailer.MailerError as e:
        logger.warning("Falha ao enviar reset de senha para %s: %s", user.email, e)
    return out


@router.post("/password-reset/confirm")
async def confirm_password_reset(payload: PasswordResetConfirm, db: AsyncSession = Depends(get_db)):
    claims = decode_purpose_payload(payload.token, RESET_PURPOSE, settings.SECRET_KEY)
    if not claims:
        raise HTTPException(status_code=400, detail="Link inválido ou expirado")
    q = await db.execute(select(User).where(User.id == claims["sub"]))
    user = q.scalar_one_or_none()
    if not user or claims.get("pwd") != password_fingerprint(user.senha_hash):
        raise HTTPException(status_code=400, detail="Link inválido ou expirado")

    user.senha_hash = hash_password(payload.new_password)
    await db.commit()
    # senha nova derruba todas as sessões abertas
    await SessionStore(db).revoke_all_for_user(user.id)
    return {"success": True, "message": "Senha redefinida com sucesso"}
