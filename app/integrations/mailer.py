# app/integrations/mailer.py
from __future__ import annotations
import html
import logging
from email.message import EmailMessage

import aiosmtplib

from app.core.config import settings

logger = logging.getLogger(__name__)


class MailerError(RuntimeError):
    def __init__(self, code: str, detail: str):
        super().__init__(f"{code}: {detail}")
        self.code = code
        self.detail = detail


async def send_email(*, to: str, subject: str, html: str, text: str | None = None) -> None:
    """Envia um e-mail via SMTP. Levanta MailerError em qualquer falha."""
    if not settings.SMTP_HOST:
        raise MailerError("smtp_not_configured", "SMTP_HOST não configurado")

    msg = EmailMessage()
    msg["From"] = settings.SMTP_FROM
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(text or "Abra este e-mail num cliente compatível com HTML.")
    msg.add_alternative(html, subtype="html")

    try:
        await aiosmtplib.send(
            msg,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            start_tls=settings.SMTP_STARTTLS,
            timeout=20,
        )
    except aiosmtplib.SMTPException as e:
        raise MailerError("smtp_failed", str(e)) from e
    except OSError as e:
        raise MailerError("smtp_unreachable", str(e)) from e

    logger.info("E-mail '%s' enviado para %s", subject, to)


def otp_email_html(full_name: str, code: str, expire_minutes: int) -> str:
    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
          <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #1e56a0; margin: 0;">OrbisLink</h1>
            <p style="color: #666; margin: 5px 0;">Conectando fornecedores e compradores</p>
          </div>
          <div style="background: #f9fafb; border-radius: 12px; padding: 30px; text-align: center;">
            <h2 style="color: #1f2937; margin-bottom: 10px;">Olá, {html.escape(full_name)}!</h2>
            <p style="color: #6b7280; margin-bottom: 20px;">Use o código abaixo para verificar seu e-mail:</p>
            <div style="background: #d4a017; color: #0a1628; font-size: 32px; font-weight: bold; letter-spacing: 8px; padding: 20px 40px; border-radius: 8px; display: inline-block;">
              {code}
            </div>
            <p style="color: #9ca3af; margin-top: 20px; font-size: 14px;">
              Este código expira em <strong>{expire_minutes} minutos</strong>
            </p>
          </div>
          <p style="color: #9ca3af; font-size: 12px; text-align: center; margin-top: 30px;">
            Se você não solicitou este código, ignore este email.
          </p>
        </div>
    """


def password_reset_email_html(full_name: str, link: str) -> str:
    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
          <h2 style="color: #1f2937;">Olá, {html.escape(full_name)}!</h2>
          <p style="color: #6b7280;">Recebemos um pedido para redefinir a sua senha no AgriLink.</p>
          <p><a href="{html.escape(link)}" style="color: #1e56a0;">Redefinir senha</a></p>
          <p style="color: #9ca3af; font-size: 12px;">Se você não fez este pedido, ignore este email.</p>
        </div>
    """
