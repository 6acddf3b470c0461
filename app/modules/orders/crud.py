# app/modules/orders/crud.py
import logging
from datetime import date, datetime

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.modules.notifications.crud import create_notification
from app.modules.products.crud import get_active_products
from app.modules.products.models import Product
from app.modules.users.models import User
from app.utils.clock import utcnow
from app.utils.money import format_kz
from .models import Order
from .rules import (
    CANCELLABLE_STATUSES, Admissibility, CancelWindow,
    cancellation_window, cart_total, check_admissibility, line_total,
)
from .schemas import CheckoutIn, OrderOut

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Pedido enviado com sucesso! Entraremos em contato em breve."


async def resolve_cart(db: AsyncSession, payload: CheckoutIn) -> list[tuple[Product, float]]:
    products = await get_active_products(db, [i.product_id for i in payload.items])
    lines: list[tuple[Product, float]] = []
    for item in payload.items:
        p = products.get(item.product_id)
        if not p:
            raise HTTPException(status_code=422, detail=f"Produto indisponível: {item.product_id}")
        lines.append((p, item.quantity))
    return lines


def evaluate(payload: CheckoutIn, lines: list[tuple[Product, float]], today: date) -> Admissibility:
    total = cart_total((p.price, qty) for p, qty in lines)
    return check_admissibility(
        total,
        payload.delivery_date,
        payload.customer.model_dump(),
        today=today,
        minimum=settings.MIN_ORDER_VALUE,
        window_days=settings.DELIVERY_WINDOW_DAYS,
    )


async def create_orders(
    db: AsyncSession,
    buyer: User,
    payload: CheckoutIn,
    lines: list[tuple[Product, float]],
) -> list[Order]:
    c = payload.customer
    orders: list[Order] = []
    for product, qty in lines:
        o = Order(
            user_id=buyer.id,
            product_id=product.id,
            quantity=qty,
            total_price=line_total(product.price, qty),
            location=c.address.strip(),
            delivery_date=payload.delivery_date,
            company=c.company.strip(),
            contact_name=c.contact.strip(),
            phone=c.phone.strip(),
            email=c.email.strip(),
            notes=(c.notes or "").strip() or None,
            status="pending",
        )
        db.add(o)
        orders.append(o)
    await db.flush()

    total = cart_total((p.price, qty) for p, qty in lines)
    await create_notification(
        db,
        user_id=buyer.id,
        type="order",
        title="Pedido recebido",
        message=f"{len(orders)} item(ns), total {format_kz(total)}. {SUCCESS_MESSAGE}",
        metadata={"order_ids": [o.id for o in orders]},
        commit=False,
    )
    # avisa cada produtor uma vez
    for owner_id in {p.user_id for p, _ in lines if p.user_id != buyer.id}:
        await create_notification(
            db,
            user_id=owner_id,
            type="order",
            title="Novo pedido",
            message=f"{buyer.full_name} fez um pedido dos seus produtos.",
            metadata={"order_ids": [o.id for o in orders]},
            commit=False,
        )
    await db.commit()
    for o in orders:
        await db.refresh(o)
    logger.info("Checkout de %s: %d pedido(s), total %s", buyer.id, len(orders), total)
    return orders


def order_out(o: Order, now: datetime | None = None) -> OrderOut:
    out = OrderOut.model_validate(o)
    if o.status in CANCELLABLE_STATUSES:
        w = cancellation_window(o.created_at, now or utcnow(), settings.CANCEL_WINDOW_HOURS)
        out.can_cancel = w.allowed
        out.remaining_label = w.label
    return out


async def list_buyer_orders(db: AsyncSession, user_id: str) -> list[Order]:
    res = await db.execute(
        select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
    )
    return list(res.scalars().all())


async def cancel_order(db: AsyncSession, user_id: str, order_id: str, now: datetime | None = None) -> Order:
    res = await db.execute(select(Order).where(Order.id == order_id, Order.user_id == user_id))
    o = res.scalar_one_or_none()
    if not o:
        raise HTTPException(status_code=404, detail="Pedido não encontrado")
    if o.status not in CANCELLABLE_STATUSES:
        raise HTTPException(status_code=409, detail="Este pedido não pode mais ser cancelado")
    w: CancelWindow = cancellation_window(o.created_at, now or utcnow(), settings.CANCEL_WINDOW_HOURS)
    if not w.allowed:
        raise HTTPException(
            status_code=403,
            detail=f"Prazo de cancelamento expirado ({settings.CANCEL_WINDOW_HOURS}h após o pedido)",
        )

    o.status = "cancelled"
    await create_notification(
        db,
        user_id=user_id,
        type="order",
        title="Pedido cancelado",
        message="Seu pedido foi cancelado com sucesso.",
        metadata={"order_id": o.id},
        commit=False,
    )
    await db.commit()
    await db.refresh(o)
    logger.info("Pedido %s cancelado por %s", o.id, user_id)
    return o
