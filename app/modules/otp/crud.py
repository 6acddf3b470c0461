# app/modules/otp/crud.py
"""
Códigos OTP de verificação de e-mail.

Estados: código pedido -> pendente -> verificado | expirado/inválido.
Política de envio: falha ao GERAR o código é erro (propaga); falha ao ENVIAR o e-mail
não é: a resposta continua de sucesso, com um aviso, para o usuário poder reenviar.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.integrations import mailer
from app.modules.users.models import User
from app.utils.clock import as_utc, utcnow
from app.utils.text import normalize_email
from .models import EmailOtp

logger = logging.getLogger(__name__)


class OtpGenerationError(RuntimeError):
    pass


def _new_code() -> str:
    return f"{secrets.randbelow(10**6):06d}"


async def generate_email_otp(db: AsyncSession, user_id: str, email: str,
                             now: datetime | None = None) -> EmailOtp:
    now = now or utcnow()
    res = await db.execute(select(User).where(User.id == user_id))
    user = res.scalar_one_or_none()
    if not user:
        raise OtpGenerationError(f"usuário {user_id} não existe")
    email = normalize_email(email)
    if email != user.email:
        raise OtpGenerationError("e-mail não corresponde ao usuário")

    # só o código mais recente vale
    await db.execute(delete(EmailOtp).where(EmailOtp.user_id == user_id, EmailOtp.used_at.is_(None)))
    otp = EmailOtp(
        user_id=user_id,
        email=email,
        code=_new_code(),
        expires_at=now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
    )
    db.add(otp)
    await db.commit()
    await db.refresh(otp)
    return otp


async def verify_email_otp(db: AsyncSession, user_id: str, code: str,
                           now: datetime | None = None) -> bool:
    """True se o código confere e ainda não expirou. Nunca levanta por código errado."""
    now = now or utcnow()
    code = (code or "").strip()
    if len(code) != 6 or not code.isdigit():
        return False

    res = await db.execute(
        select(EmailOtp).where(
            EmailOtp.user_id == user_id,
            EmailOtp.code == code,
            EmailOtp.used_at.is_(None),
        )
    )
    otp = res.scalars().first()
    if not otp:
        return False
    # expira exatamente OTP_EXPIRE_MINUTES após a geração
    if now >= as_utc(otp.expires_at):
        return False

    otp.used_at = now
    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if user:
        user.email_verified = True
    await db.commit()
    return True


async def sync_user_email_verified(db: AsyncSession, user: User) -> bool:
    """Marca o e-mail como verificado se já existe um OTP usado para o e-mail atual."""
    if user.email_verified:
        return True
    res = await db.execute(
        select(EmailOtp.id).where(
            EmailOtp.user_id == user.id,
            EmailOtp.email == user.email,
            EmailOtp.used_at.is_not(None),
        )
    )
    if res.first() is None:
        return False
    user.email_verified = True
    await db.commit()
    return True


async def issue_and_send(db: AsyncSession, *, user_id: str, email: str, full_name: str) -> dict[str, Any]:
    """Gera o código e tenta enviá-lo. Só a geração pode falhar (OtpGenerationError)."""
    logger.info("Gerando OTP para %s", email)
    otp = await generate_email_otp(db, user_id, email)
    logger.debug("OTP gerado para %s: %s", email, otp.code)

    out: dict[str, Any] = {
        "success": True,
        "message": f"Código enviado para {otp.email}",
        "resend_after": settings.OTP_RESEND_SECONDS,
    }
    try:
        await mailer.send_email(
            to=otp.email,
            subject="Código de Verificação - OrbisLink",
            html=mailer.otp_email_html(full_name, otp.code, settings.OTP_EXPIRE_MINUTES),
            text=f"Seu código de verificação OrbisLink: {otp.code}",
        )
    except mailer.MailerError as e:
        logger.warning("Falha ao enviar OTP para %s: %s", otp.email, e)
        out["message"] = "Código gerado, mas o envio do e-mail falhou"
        out["warning"] = f"Erro ao enviar email: {e.detail}"
    return out
