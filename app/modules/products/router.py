# app/modules/products/router.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.core.dependencies import get_db, get_current_user, require_user_type
from app.modules.users.models import User
from .crud import get_product_or_404
from .models import Product
from .schemas import ProductOut, ProductCreate

logger = logging.getLogger(__name__)

router = APIRouter()  # incluído com prefix "/products"

# CATÁLOGO
@router.get("", response_model=list[ProductOut])
async def list_products(
    db: AsyncSession = Depends(get_db),
    product_type: Optional[str] = Query(None),
    province_id: Optional[str] = Query(None),
    limit: int = Query(100, le=1000),
    offset: int = 0,
):
    stmt = select(Product).where(Product.status == "active")
    if product_type:
        stmt = stmt.where(Product.product_type == product_type)
    if province_id:
        stmt = stmt.where(Product.province_id == province_id)
    stmt = stmt.order_by(Product.created_at.desc()).limit(limit).offset(offset)
    res = await db.execute(stmt)
    return res.scalars().all()

# MEUS PRODUTOS (inclui inativos; removidos ficam de fora)
@router.get("/mine", response_model=list[ProductOut])
async def list_my_products(
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    res = await db.execute(
        select(Product)
        .where(Product.user_id == me.id, Product.status != "removed")
        .order_by(Product.created_at.desc())
    )
    return res.scalars().all()

@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    return await get_product_or_404(db, product_id)

# PUBLICAR
@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_user_type("agricultor", "agente")),
):
    obj = Product(**payload.model_dump(), user_id=me.id, status="active")
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Produto %s publicado por %s", obj.id, me.id)
    return obj

# REMOVER (soft delete)
@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    obj = await get_product_or_404(db, product_id)
    if obj.user_id != me.id:
        raise HTTPException(status_code=404, detail="Produto não encontrado.")
    obj.status = "removed"
    await db.commit()
    return
