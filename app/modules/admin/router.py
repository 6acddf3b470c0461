from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import case, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_admin, get_current_user
from app.modules.auth.models import AuthSession
from app.modules.orders.models import Order
from app.modules.products.models import Product
from app.modules.support.models import SupportMessage
from app.modules.support.schemas import SupportMessageOut, SupportMessageUpdate
from app.modules.users.models import User
from .schemas import RoleUpdate, UserAdminOut

router = APIRouter()

ROOT_ROLES = ("root", "super_root")


async def get_support_staff(user: User = Depends(get_current_user)) -> User:
    if not (user.is_admin or user.is_support_agent):
        raise HTTPException(status_code=403, detail="Admin only")
    return user


@router.get("/users", response_model=list[UserAdminOut])
async def list_users_admin(
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    # super roots primeiro, depois roots, depois por nome
    rank = case((User.admin_role == "super_root", 0), (User.admin_role == "root", 1), else_=2)
    stmt = select(User).order_by(rank, User.full_name)
    if q:
        like = f"%{q.strip()}%"
        stmt = stmt.where(User.full_name.ilike(like) | User.email.ilike(like))
    res = await db.execute(stmt)
    return res.scalars().all()


@router.patch("/users/{user_id}/role", response_model=UserAdminOut)
async def update_user_role(
    user_id: str,
    payload: RoleUpdate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    res = await db.execute(select(User).where(User.id == user_id))
    target = res.scalar_one_or_none()
    if not target:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    if target.id == admin.id:
        raise HTTPException(status_code=400, detail="Você não pode alterar o próprio papel.")

    # só root gerencia admins; só super root mexe em roots
    touches_root = payload.admin_role in ROOT_ROLES or target.admin_role in ROOT_ROLES
    if touches_root and not admin.is_super_root:
        raise HTTPException(status_code=403, detail="Apenas super root pode alterar administradores root.")
    if not admin.is_root_admin:
        raise HTTPException(status_code=403, detail="Apenas administradores root podem gerenciar outros admins")

    target.admin_role = payload.admin_role
    await db.commit()
    await db.refresh(target)
    return target


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    # 1) Localiza o alvo
    res = await db.execute(select(User).where(User.id == user_id))
    target = res.scalar_one_or_none()
    if not target:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")

    # 2) Regras de segurança
    if target.id == admin.id:
        raise HTTPException(status_code=400, detail="Você não pode excluir a si mesmo.")
    if target.is_root_admin:
        raise HTTPException(status_code=403, detail="Não é permitido excluir um administrador root.")
    # pedidos seguram os produtos do vendedor (FK RESTRICT)
    sold = await db.execute(
        select(Order.id).join(Product, Order.product_id == Product.id).where(Product.user_id == target.id).limit(1)
    )
    if sold.first():
        raise HTTPException(
            status_code=409,
            detail="Usuário possui produtos com pedidos registrados. Remova os anúncios em vez de excluir a conta.",
        )

    # 3) Derruba as sessões abertas
    await db.execute(delete(AuthSession).where(AuthSession.user_id == target.id))

    # 4) Exclui o usuário
    await db.delete(target)
    await db.commit()

    return Response(status_code=204)


@router.get("/support-messages", response_model=list[SupportMessageOut])
async def list_support_messages(
    status: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_support_staff),
):
    stmt = select(SupportMessage).order_by(SupportMessage.created_at.desc())
    if status:
        stmt = stmt.where(SupportMessage.status == status)
    res = await db.execute(stmt)
    return res.scalars().all()


@router.patch("/support-messages/{message_id}", response_model=SupportMessageOut)
async def update_support_message(
    message_id: str,
    payload: SupportMessageUpdate,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_support_staff),
):
    res = await db.execute(select(SupportMessage).where(SupportMessage.id == message_id))
    msg = res.scalar_one_or_none()
    if not msg:
        raise HTTPException(status_code=404, detail="Mensagem não encontrada")
    msg.status = payload.status
    await db.commit()
    await db.refresh(msg)
    return msg
