# app/modules/fichas/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.modules.users.models import User
from app.utils.text import normalize_phone
from .models import FichaRecebimento
from .schemas import FichaCreate, FichaOut

router = APIRouter()


@router.post("", response_model=FichaOut, status_code=status.HTTP_201_CREATED)
async def create_ficha(payload: FichaCreate, db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    data = payload.model_dump()
    data["telefone"] = normalize_phone(data.get("telefone"))
    obj = FichaRecebimento(**data, user_id=me.id)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@router.get("/mine", response_model=list[FichaOut])
async def my_fichas(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    res = await db.execute(
        select(FichaRecebimento).where(FichaRecebimento.user_id == me.id).order_by(FichaRecebimento.created_at.desc())
    )
    return res.scalars().all()
