# app/modules/products/crud.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status
from .models import Product

async def get_product_or_404(db: AsyncSession, product_id: str) -> Product:
    q = await db.execute(select(Product).where(Product.id == product_id, Product.status != "removed"))
    product = q.scalar_one_or_none()
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Produto não encontrado.")
    return product

async def get_active_products(db: AsyncSession, ids: list[str]) -> dict[str, Product]:
    if not ids:
        return {}
    q = await db.execute(select(Product).where(Product.id.in_(ids), Product.status == "active"))
    return {p.id: p for p in q.scalars().all()}

async def list_active_products(db: AsyncSession, limit: int = 1000) -> list[Product]:
    q = await db.execute(
        select(Product).where(Product.status == "active").order_by(Product.created_at.desc()).limit(limit)
    )
    return list(q.scalars().all())
