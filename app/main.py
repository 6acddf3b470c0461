# app/main.py
from contextlib import asynccontextmanager
import json
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.api.v1.router import api_router
from app.db.session import engine
from app.db.base import Base

setup_logging()
logger = logging.getLogger("app.main")


def _normalize_origins(value) -> list[str]:
    """Aceita lista, JSON string ou CSV e devolve lista de origens."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(o).strip() for o in value if str(o).strip()]
    if isinstance(value, str):
        try:
            as_json = json.loads(value)
        except ValueError:
            as_json = None
        if isinstance(as_json, (list, tuple)):
            return [str(o).strip() for o in as_json if str(o).strip()]
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(value).strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # em dev as tabelas são criadas no boot; em prod o schema já existe
    env = (settings.ENVIRONMENT or "").lower().strip()
    if env == "dev":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tabelas verificadas (%s)", engine.url.get_backend_name())
    yield
    await engine.dispose()


# --- App ---
app = FastAPI(title="AgriLink Backend", lifespan=lifespan)

# --- CORS (colocado ANTES dos routers) ---
origins = _normalize_origins(settings.CORS_ORIGINS)

if not origins:
    origins = [
        "http://localhost:8080",
        "http://localhost:5173",
    ]

# preflight OPTIONS é respondido aqui para todas as rotas
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


# --- API v1 (só depois do CORS) ---
app.include_router(api_router, prefix=settings.API_V1_PREFIX)
