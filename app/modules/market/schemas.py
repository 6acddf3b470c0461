from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel


class MarketProductIn(BaseModel):
    product_type: str
    quantity: float
    price: float
    province_id: Optional[str] = None
    municipality_id: Optional[str] = None
    logistics_access: Optional[str] = None
    created_at: Optional[datetime] = None


class MarketAnalysisIn(BaseModel):
    products: Optional[List[MarketProductIn]] = None
    language: str = "pt"


class MarketAnalysisOut(BaseModel):
    analysis: str
    stats: List[dict[str, Any]]
    totalProducts: int
    generatedAt: datetime
