from datetime import timedelta

from sqlalchemy import select

from app.modules.notifications.models import Notification
from app.modules.orders.models import Order
from app.utils.clock import local_today, utcnow

CUSTOMER = {
    "company": "Supermercados Kianda",
    "contact": "Paulo Neto",
    "phone": "+244 912 345 678",
    "email": "compras@kianda.ao",
    "address": "Av. Deolinda Rodrigues, Luanda",
}


async def _cart(make_user, make_product, last_price):
    farmer = await make_user(email="produtor@agrilink.ao", user_type="agricultor")
    p1 = await make_product(farmer, "Feijão", price=200_000)
    p2 = await make_product(farmer, "Milho", price=100_000)
    p3 = await make_product(farmer, "Banana", price=last_price)
    return [
        {"product_id": p1.id, "quantity": 2},
        {"product_id": p2.id, "quantity": 3},
        {"product_id": p3.id, "quantity": 1},
    ]


async def test_checkout_at_minimum_creates_pending_orders(client, db, make_user, make_product, login):
    buyer = await make_user()
    items = await _cart(make_user, make_product, last_price=300_000)
    headers = await login(buyer.email)
    body = {"items": items, "delivery_date": str(local_today() + timedelta(days=10)), "customer": CUSTOMER}

    r = await client.post("/api/v1/orders/checkout/validate", json=body, headers=headers)
    assert r.status_code == 200
    assert r.json()["enabled"] is True
    assert r.json()["total"] == 1_000_000

    r = await client.post("/api/v1/orders/checkout", json=body, headers=headers)
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["success"] is True
    assert data["message"] == "Pedido enviado com sucesso! Entraremos em contato em breve."
    assert len(data["orders"]) == 3
    assert {o["status"] for o in data["orders"]} == {"pending"}
    assert all(o["can_cancel"] for o in data["orders"])

    res = await db.execute(select(Notification).where(Notification.user_id == buyer.id))
    assert len(res.scalars().all()) == 1


async def test_checkout_below_minimum_is_rejected(client, db, make_user, make_product, login):
    buyer = await make_user()
    items = await _cart(make_user, make_product, last_price=299_999)
    headers = await login(buyer.email)
    body = {"items": items, "delivery_date": str(local_today() + timedelta(days=10)), "customer": CUSTOMER}

    r = await client.post("/api/v1/orders/checkout", json=body, headers=headers)
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["enabled"] is False
    assert detail["shortfall"] == 1
    assert detail["reasons"] == ["Valor mínimo não atingido. Faltam 1 Kz"]

    res = await db.execute(select(Order))
    assert res.scalars().all() == []


async def test_checkout_delivery_too_far_and_missing_fields(client, make_user, make_product, login):
    buyer = await make_user()
    items = await _cart(make_user, make_product, last_price=300_000)
    headers = await login(buyer.email)
    body = {
        "items": items,
        "delivery_date": str(local_today() + timedelta(days=15)),
        "customer": {**CUSTOMER, "contact": ""},
    }
    r = await client.post("/api/v1/orders/checkout/validate", json=body, headers=headers)
    reasons = r.json()["reasons"]
    assert "A data de entrega deve ser em até 14 dias" in reasons
    assert "Campo obrigatório: Nome do Contato" in reasons


async def test_checkout_requires_buyer_profile(client, make_user, make_product, login):
    farmer = await make_user(email="outro@agrilink.ao", user_type="agricultor")
    items = await _cart(make_user, make_product, last_price=300_000)
    headers = await login(farmer.email)
    body = {"items": items, "delivery_date": str(local_today()), "customer": CUSTOMER}
    r = await client.post("/api/v1/orders/checkout", json=body, headers=headers)
    assert r.status_code == 403


async def test_unknown_product_is_rejected(client, make_user, login):
    buyer = await make_user()
    headers = await login(buyer.email)
    body = {"items": [{"product_id": "nao-existe", "quantity": 1}], "customer": CUSTOMER}
    r = await client.post("/api/v1/orders/checkout/validate", json=body, headers=headers)
    assert r.status_code == 422


async def _order(db, buyer, product, age: timedelta, status="pending"):
    o = Order(
        user_id=buyer.id,
        product_id=product.id,
        quantity=10,
        total_price=1_000_000,
        location="Luanda",
        status=status,
        created_at=utcnow() - age,
    )
    db.add(o)
    await db.commit()
    await db.refresh(o)
    return o


async def test_cancel_offer_follows_three_hour_window(client, db, make_user, make_product, login):
    buyer = await make_user()
    product = await make_product(buyer)
    recent = await _order(db, buyer, product, timedelta(hours=2, minutes=59))
    old = await _order(db, buyer, product, timedelta(hours=3, seconds=1))
    headers = await login(buyer.email)

    r = await client.get("/api/v1/orders/mine", headers=headers)
    by_id = {o["id"]: o for o in r.json()}
    assert by_id[recent.id]["can_cancel"] is True
    assert by_id[recent.id]["remaining_label"] == "0h 1m restantes"
    assert by_id[old.id]["can_cancel"] is False
    assert by_id[old.id]["remaining_label"] is None

    r = await client.post(f"/api/v1/orders/{old.id}/cancel", headers=headers)
    assert r.status_code == 403

    r = await client.post(f"/api/v1/orders/{recent.id}/cancel", headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"
    assert r.json()["can_cancel"] is False

    r = await client.post(f"/api/v1/orders/{recent.id}/cancel", headers=headers)
    assert r.status_code == 409


async def test_cancel_is_scoped_to_owner(client, db, make_user, make_product, login):
    buyer = await make_user()
    other = await make_user(email="intruso@agrilink.ao")
    product = await make_product(buyer)
    o = await _order(db, buyer, product, timedelta(minutes=5))
    headers = await login(other.email)

    r = await client.post(f"/api/v1/orders/{o.id}/cancel", headers=headers)
    assert r.status_code == 404
    r = await client.post("/api/v1/orders/nao-existe/cancel", headers=headers)
    assert r.status_code == 404


async def test_in_progress_order_cannot_be_cancelled(client, db, make_user, make_product, login):
    buyer = await make_user()
    product = await make_product(buyer)
    o = await _order(db, buyer, product, timedelta(minutes=5), status="in_progress")
    headers = await login(buyer.email)
    r = await client.post(f"/api/v1/orders/{o.id}/cancel", headers=headers)
    assert r.status_code == 409


async def test_cent_prices_summing_to_minimum_are_accepted(client, make_user, make_product, login):
    buyer = await make_user()
    farmer = await make_user(email="produtor@agrilink.ao", user_type="agricultor")
    prices = (226_283.44, 674_093.19, 99_623.37)
    items = [{"product_id": (await make_product(farmer, price=p)).id, "quantity": 1} for p in prices]
    body = {"items": items, "delivery_date": str(local_today()), "customer": CUSTOMER}

    r = await client.post("/api/v1/orders/checkout/validate", json=body, headers=await login(buyer.email))
    assert r.json()["total"] == 1_000_000
    assert r.json()["enabled"] is True
