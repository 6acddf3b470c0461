from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.main import app
from app.core.dependencies import get_db
from app.core.security import hash_password
from app.db.base import Base
from app.modules.products.models import Product
from app.modules.users.models import User

PASSWORD = "segredo123"


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{(tmp_path / 'test.db').as_posix()}", poolclass=NullPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make(email="comprador@agrilink.ao", user_type="comprador", admin_role=None,
                    email_verified=True, password=PASSWORD, full_name="Maria Teste"):
        u = User(
            email=email,
            senha_hash=hash_password(password),
            full_name=full_name,
            identity_document="004512345LA042",
            user_type=user_type,
            admin_role=admin_role,
            province_id="luanda",
            municipality_id="luanda-city",
            email_verified=email_verified,
        )
        db.add(u)
        await db.commit()
        await db.refresh(u)
        return u
    return _make


@pytest.fixture
def make_product(db):
    async def _make(owner, product_type="Milho", price=100_000, quantity=500, province_id="huambo"):
        p = Product(
            user_id=owner.id,
            product_type=product_type,
            quantity=quantity,
            price=price,
            harvest_date=date(2026, 9, 1),
            province_id=province_id,
            municipality_id="caala",
            logistics_access="sim",
            farmer_name="João Agricultor",
            contact="923000000",
            photos=[],
            status="active",
        )
        db.add(p)
        await db.commit()
        await db.refresh(p)
        return p
    return _make


@pytest.fixture
def login(client):
    async def _login(email, password=PASSWORD) -> dict:
        r = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _login
