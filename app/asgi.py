# app/asgi.py
import sys, asyncio

# psycopg async no Windows exige o SelectorEventLoop; troca ANTES de importar o app
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from app.main import app  # noqa: E402
