# app/modules/products/schemas.py
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    product_type: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    price: float = Field(gt=0)
    harvest_date: date
    province_id: str
    municipality_id: str
    logistics_access: Literal["sim", "nao", "parcial"]
    farmer_name: str = Field(min_length=1)
    contact: str = Field(min_length=1)
    description: Optional[str] = None
    photos: List[str] = []
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None


class ProductCreate(ProductBase):
    pass


class ProductOut(ProductBase):
    id: str
    user_id: str
    status: str
    photos: Optional[List[str]] = None
    created_at: datetime

    class Config:
        from_attributes = True
