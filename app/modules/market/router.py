# app/modules/market/router.py
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, get_current_user
from app.integrations.ai_gateway import AIGatewayClient, AIGatewayError
from app.modules.products.crud import list_active_products
from app.modules.users.models import User
from app.utils.clock import utcnow
from app.utils.i18n import normalize_language
from .prompts import SYSTEM_PROMPT, build_prompt
from .schemas import MarketAnalysisIn, MarketAnalysisOut
from .stats import product_stats, product_summary

logger = logging.getLogger(__name__)

router = APIRouter()

GATEWAY_ERRORS = {
    429: "Rate limit exceeded. Please try again later.",
    402: "Payment required. Please add funds.",
}


def get_ai_gateway_client() -> Optional[AIGatewayClient]:
    if not settings.AI_GATEWAY_API_KEY:
        return None
    return AIGatewayClient(
        api_key=settings.AI_GATEWAY_API_KEY,
        url=settings.AI_GATEWAY_URL,
        model=settings.AI_GATEWAY_MODEL,
    )


@router.post("/analysis", response_model=MarketAnalysisOut)
async def market_analysis(
    payload: MarketAnalysisIn,
    db: AsyncSession = Depends(get_db),
    me: User = Depends(get_current_user),
    client: Optional[AIGatewayClient] = Depends(get_ai_gateway_client),
):
    if client is None:
        logger.error("AI_GATEWAY_API_KEY não configurada")
        return JSONResponse(status_code=500, content={"error": "AI_GATEWAY_API_KEY is not configured"})

    if payload.products is not None:
        products = [p.model_dump() for p in payload.products]
    else:
        products = [
            {
                "product_type": p.product_type,
                "quantity": p.quantity,
                "price": p.price,
                "province_id": p.province_id,
                "municipality_id": p.municipality_id,
                "logistics_access": p.logistics_access,
                "created_at": p.created_at,
            }
            for p in await list_active_products(db)
        ]

    stats = product_stats(products)
    prompt = build_prompt(normalize_language(payload.language), stats, product_summary(products), len(products))

    try:
        analysis = await client.chat(system=SYSTEM_PROMPT, user=prompt)
    except AIGatewayError as e:
        if e.status_code in GATEWAY_ERRORS:
            return JSONResponse(status_code=e.status_code, content={"error": GATEWAY_ERRORS[e.status_code]})
        return JSONResponse(status_code=500, content={"error": f"AI gateway error: {e.status_code}"})
    except httpx.HTTPError as e:
        logger.error("Falha ao chamar o gateway de IA: %s", e)
        return JSONResponse(status_code=500, content={"error": "AI gateway unavailable"})

    return MarketAnalysisOut(
        analysis=analysis,
        stats=stats,
        totalProducts=len(products),
        generatedAt=utcnow(),
    )
