import json

import httpx
import pytest

from app.main import app
from app.integrations.ai_gateway import AIGatewayClient
from app.modules.market.router import get_ai_gateway_client
from app.modules.market.stats import product_stats

PRODUCTS = [
    {"product_type": "Milho", "quantity": 100, "price": 50_000, "province_id": "huambo", "municipality_id": "caala"},
    {"product_type": "Milho", "quantity": 300, "price": 70_000, "province_id": "bie", "municipality_id": "cuito"},
    {"product_type": "Feijão", "quantity": 50, "price": 120_000},
]


def test_product_stats_groups_by_type():
    stats = product_stats(PRODUCTS)
    assert stats[0] == {
        "product": "Milho",
        "count": 2,
        "avgPrice": 60_000,
        "minPrice": 50_000,
        "maxPrice": 70_000,
        "totalQuantity": 400,
    }
    assert stats[1]["product"] == "Feijão"


@pytest.fixture
def gateway():
    """Instala um cliente do gateway com transporte simulado; devolve a lista de requests."""
    state = {"status": 200, "requests": []}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(json.loads(request.content))
        if state["status"] != 200:
            return httpx.Response(state["status"], text="erro")
        return httpx.Response(200, json={"choices": [{"message": {"content": "Mercado estável."}}]})

    client = AIGatewayClient(
        api_key="k", url="https://ai.test/v1/chat/completions", model="test-model",
        transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_ai_gateway_client] = lambda: client
    yield state
    app.dependency_overrides.pop(get_ai_gateway_client, None)


async def test_analysis_relays_gateway_text(client, make_user, login, gateway):
    user = await make_user()
    headers = await login(user.email)
    r = await client.post("/api/v1/market/analysis", json={"products": PRODUCTS, "language": "en"}, headers=headers)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["analysis"] == "Mercado estável."
    assert data["totalProducts"] == 3
    assert len(data["stats"]) == 2
    assert "generatedAt" in data

    sent = gateway["requests"][0]
    assert sent["model"] == "test-model"
    assert "ENGLISH" in sent["messages"][1]["content"]


async def test_analysis_uses_catalog_when_no_products(client, make_user, make_product, login, gateway):
    user = await make_user()
    await make_product(user, "Mandioca", price=30_000)
    headers = await login(user.email)
    r = await client.post("/api/v1/market/analysis", json={}, headers=headers)
    assert r.json()["totalProducts"] == 1
    assert "PORTUGUÊS" in gateway["requests"][0]["messages"][1]["content"]


@pytest.mark.parametrize("status,message", [
    (429, "Rate limit exceeded. Please try again later."),
    (402, "Payment required. Please add funds."),
])
async def test_gateway_limits_are_relayed(client, make_user, login, gateway, status, message):
    gateway["status"] = status
    user = await make_user()
    headers = await login(user.email)
    r = await client.post("/api/v1/market/analysis", json={"products": PRODUCTS}, headers=headers)
    assert r.status_code == status
    assert r.json() == {"error": message}


async def test_other_gateway_errors_are_500(client, make_user, login, gateway):
    gateway["status"] = 503
    user = await make_user()
    headers = await login(user.email)
    r = await client.post("/api/v1/market/analysis", json={"products": PRODUCTS}, headers=headers)
    assert r.status_code == 500


async def test_missing_gateway_key(client, make_user, login):
    app.dependency_overrides[get_ai_gateway_client] = lambda: None
    try:
        user = await make_user()
        headers = await login(user.email)
        r = await client.post("/api/v1/market/analysis", json={"products": PRODUCTS}, headers=headers)
        assert r.status_code == 500
    finally:
        app.dependency_overrides.pop(get_ai_gateway_client, None)
