# app/modules/support/router.py
import logging
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, get_optional_user
from app.modules.users.models import User
from app.utils.clock import utcnow
from app.utils.text import normalize_email
from .models import SupportMessage
from .schemas import SupportNotifyIn, SupportNotifyOut

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "Mensagem enviada com sucesso! Nossa equipe entrará em contato em breve."


def whatsapp_text(msg: SupportMessage) -> str:
    received = utcnow().astimezone(ZoneInfo(settings.TIMEZONE)).strftime("%d/%m/%Y %H:%M:%S")
    return (
        "🚨 *Nova mensagem de suporte - AgriLink*\n\n"
        f"*Nome:* {msg.name}\n"
        f"*Email:* {msg.email}\n"
        f"*Telefone:* {msg.phone or 'Não informado'}\n\n"
        f"*Mensagem:*\n{msg.message}\n\n"
        f"_Mensagem recebida em {received}_"
    )


@router.post("/notify", response_model=SupportNotifyOut)
async def notify_support(
    payload: SupportNotifyIn,
    db: AsyncSession = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    msg = SupportMessage(
        user_id=user.id if user else None,
        name=payload.name.strip(),
        email=normalize_email(payload.email),
        phone=(payload.phone or "").strip() or None,
        message=payload.message.strip(),
        status="pendente",
    )
    try:
        db.add(msg)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Erro ao salvar mensagem de suporte: %s", e)
        return JSONResponse(status_code=500, content={"error": "Erro ao enviar mensagem"})

    # integração com WhatsApp Business ainda não existe; o texto vai para o log
    logger.info("Notificação WhatsApp para %s:\n%s", settings.SUPPORT_WHATSAPP_NUMBER, whatsapp_text(msg))
    return SupportNotifyOut(success=True, message=SUCCESS_MESSAGE, whatsapp_notified=True)
