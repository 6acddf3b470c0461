from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class CartLine(BaseModel):
    product_id: str
    quantity: float = Field(gt=0)


class CustomerInfo(BaseModel):
    # vazios são aceitos aqui; a validação do pedido devolve os motivos
    company: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    notes: Optional[str] = None


class CheckoutIn(BaseModel):
    items: List[CartLine] = Field(min_length=1)
    delivery_date: Optional[date] = None
    customer: CustomerInfo = CustomerInfo()


class AdmissibilityOut(BaseModel):
    enabled: bool
    total: float
    minimum: float
    minimum_met: bool
    shortfall: float
    reasons: List[str] = []


class OrderOut(BaseModel):
    id: str
    product_id: str
    quantity: float
    total_price: float
    transport_fee: Optional[float] = None
    location: str
    delivery_date: Optional[date] = None
    company: Optional[str] = None
    contact_name: Optional[str] = None
    status: str
    created_at: datetime
    can_cancel: bool = False
    remaining_label: Optional[str] = None

    class Config:
        from_attributes = True


class CheckoutOut(BaseModel):
    success: bool
    message: str
    total: float
    orders: List[OrderOut]
