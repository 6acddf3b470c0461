from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.dependencies import get_db, get_current_user
from app.utils.text import is_blank, normalize_phone
from .models import User
from .schemas import UserOut, UserPublicOut, UserUpdate

router = APIRouter()


@router.get("/me", response_model=UserOut)
async def users_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserOut)
async def update_me(
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = payload.model_dump(exclude_unset=True)
    for k in ("full_name", "identity_document", "province_id", "municipality_id"):
        if k in data and is_blank(data[k]):
            raise HTTPException(status_code=422, detail=f"Campo obrigatório: {k}")
    if "phone" in data:
        data["phone"] = normalize_phone(data["phone"])

    for k, v in data.items():
        setattr(user, k, v)

    await db.commit()
    await db.refresh(user)
    return user


@router.get("/{user_id}/public", response_model=UserPublicOut)
async def public_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    q = await db.execute(select(User).where(User.id == user_id))
    u = q.scalar_one_or_none()
    if not u:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return u
