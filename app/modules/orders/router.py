# app/modules/orders/router.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user, require_user_type
from app.modules.users.models import User
from app.utils.clock import local_today
from .crud import (
    SUCCESS_MESSAGE, cancel_order, create_orders, evaluate,
    list_buyer_orders, order_out, resolve_cart,
)
from .schemas import AdmissibilityOut, CheckoutIn, CheckoutOut, OrderOut

router = APIRouter()


def _admissibility_out(a) -> AdmissibilityOut:
    return AdmissibilityOut(
        enabled=a.enabled,
        total=a.total,
        minimum=a.minimum,
        minimum_met=a.minimum_met,
        shortfall=a.shortfall,
        reasons=a.reasons,
    )


@router.post("/checkout/validate", response_model=AdmissibilityOut)
async def validate_checkout(
    payload: CheckoutIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
):
    lines = await resolve_cart(db, payload)
    return _admissibility_out(evaluate(payload, lines, local_today()))


@router.post("/checkout", response_model=CheckoutOut, status_code=status.HTTP_201_CREATED)
async def checkout(
    payload: CheckoutIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(require_user_type("comprador")),
):
    lines = await resolve_cart(db, payload)
    a = evaluate(payload, lines, local_today())
    if not a.enabled:
        raise HTTPException(status_code=422, detail=_admissibility_out(a).model_dump())

    orders = await create_orders(db, me, payload, lines)
    return CheckoutOut(
        success=True,
        message=SUCCESS_MESSAGE,
        total=a.total,
        orders=[order_out(o) for o in orders],
    )


@router.get("/mine", response_model=list[OrderOut])
async def my_orders(db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    return [order_out(o) for o in await list_buyer_orders(db, me.id)]


@router.post("/{order_id}/cancel", response_model=OrderOut)
async def cancel(order_id: str, db: AsyncSession = Depends(get_db), me: User = Depends(get_current_user)):
    return order_out(await cancel_order(db, me.id, order_id))
