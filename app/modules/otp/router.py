# app/modules/otp/router.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.modules.users.models import User
from app.utils.text import normalize_email
from .crud import OtpGenerationError, issue_and_send, verify_email_otp
from .schemas import OtpSendIn, OtpSendOut, OtpVerifyIn, OtpVerifyOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send", response_model=OtpSendOut)
async def send_otp_email(payload: OtpSendIn, db: AsyncSession = Depends(get_db)):
    try:
        out = await issue_and_send(db, user_id=payload.user_id, email=payload.email, full_name=payload.full_name)
    except OtpGenerationError as e:
        logger.error("Erro ao gerar OTP: %s", e)
        return JSONResponse(status_code=500, content={"error": "Erro ao gerar código OTP"})
    return out


@router.post("/verify", response_model=OtpVerifyOut)
async def verify_otp(payload: OtpVerifyIn, db: AsyncSession = Depends(get_db)):
    user_id = payload.user_id
    if not user_id:
        res = await db.execute(select(User.id).where(User.email == normalize_email(payload.email)))
        user_id = res.scalar_one_or_none()
        if not user_id:
            return OtpVerifyOut(verified=False)
    return OtpVerifyOut(verified=await verify_email_otp(db, user_id, payload.code))
