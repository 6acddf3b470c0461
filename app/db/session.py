# app/db/session.py
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from app.core.config import settings


def _database_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    # sem DATABASE_URL: arquivo SQLite local em ./data
    data_dir = Path(__file__).resolve().parents[2] / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{(data_dir / 'agrilink.db').as_posix()}"


_db_url = _database_url()
_engine_kwargs = {"echo": False}
if not _db_url.startswith("sqlite"):
    # conexões do pooler do Supabase caem com frequência
    _engine_kwargs["pool_pre_ping"] = True

engine = create_async_engine(_db_url, **_engine_kwargs)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
