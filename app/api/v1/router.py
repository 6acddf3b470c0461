# app/api/v1/router.py
from fastapi import APIRouter
from app.modules.auth.router import router as auth_router
from app.modules.users.router import router as users_router
from app.modules.otp.router import router as otp_router
from app.modules.products.router import router as products_router
from app.modules.orders.router import router as orders_router
from app.modules.push.router import router as push_router
from app.modules.support.router import router as support_router
from app.modules.work_sessions.router import router as work_sessions_router
from app.modules.notifications.router import router as notifications_router
from app.modules.market.router import router as market_router
from app.modules.locations.router import router as locations_router
from app.modules.fichas.router import router as fichas_router
from app.modules.admin.router import router as admin_router
from app.modules.conversations.router import router as conversations_router

api_router = APIRouter()

api_router.include_router(auth_router,    prefix="/auth",    tags=["auth"])
api_router.include_router(users_router,   prefix="/users",   tags=["users"])
api_router.include_router(otp_router,     prefix="/otp",     tags=["otp"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(orders_router,  prefix="/orders",  tags=["orders"])
api_router.include_router(push_router,    prefix="/push",    tags=["push"])
api_router.include_router(support_router, prefix="/support", tags=["support"])
api_router.include_router(work_sessions_router, prefix="/work-sessions", tags=["work-sessions"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
api_router.include_router(market_router,  prefix="/market",  tags=["market"])
api_router.include_router(locations_router, prefix="/locations", tags=["locations"])
api_router.include_router(fichas_router,  prefix="/fichas",  tags=["fichas"])
api_router.include_router(admin_router,   prefix="/admin",   tags=["admin"])
api_router.include_router(conversations_router, prefix="/conversations", tags=["conversations"])
